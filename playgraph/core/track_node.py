"""Per-identity aggregate of play statistics.

A TrackNode is created the first time a canonical identity is seen and is
mutated in place by every later play or URI sighting for that identity.
Invalid input to its mutators is ignored rather than raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from .models import Position3D, TrackMetadata

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_TITLE = "Unknown Title"


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _text_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


class TrackNode:
    """A single track across platforms, with its accumulated plays.

    Composite state is only reachable through read-only properties that
    return immutable values or fresh copies. The position is meant to be
    set by a visualization layer only.

    Example:
        node = TrackNode("the beatles::hey jude::", TrackMetadata("The Beatles", "Hey Jude"))
        node.add_platform_uri("spotify:track:0aym2LBJBk9DAYuHHutrIl")
        node.record_play(180000)
    """

    __slots__ = ("_identity", "_metadata", "_platform_uris", "_play_count", "_total_play_time", "_position")

    def __init__(self, identity: str, metadata: TrackMetadata | Mapping[str, Any]) -> None:
        """Initialize the node.

        Args:
            identity: Canonical identity key (see core.identity.make_identity)
            metadata: Raw metadata; empty artist/title get placeholder
                labels, an empty album stays empty
        """
        if isinstance(metadata, Mapping):
            artist, title, album = metadata.get("artist"), metadata.get("title"), metadata.get("album")
        else:
            artist, title, album = metadata.artist, metadata.title, metadata.album

        self._identity = identity
        self._metadata = TrackMetadata(
            artist=_text_or(artist, UNKNOWN_ARTIST),
            title=_text_or(title, UNKNOWN_TITLE),
            album=_text_or(album, ""),
        )
        self._platform_uris: set[str] = set()
        self._play_count = 0
        self._total_play_time: int | float = 0
        self._position = Position3D()

    def __repr__(self) -> str:
        return f"TrackNode({self._identity!r}, plays={self._play_count})"

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def metadata(self) -> TrackMetadata:
        return self._metadata

    @property
    def play_count(self) -> int:
        return self._play_count

    @property
    def total_play_time(self) -> int | float:
        """Total milliseconds played across all recorded plays."""
        return self._total_play_time

    @property
    def position(self) -> Position3D:
        return self._position

    @property
    def platform_uris(self) -> frozenset[str]:
        return frozenset(self._platform_uris)

    def record_play(self, ms_played: Any) -> None:
        """Record one play of ms_played milliseconds.

        Only finite numbers greater than zero count; skips (0), negative
        values, NaN and non-numbers are ignored.
        """
        if _is_finite_number(ms_played) and ms_played > 0:
            self._play_count += 1
            self._total_play_time += ms_played

    def add_platform_uri(self, uri: Any) -> None:
        """Remember a platform URI for this track. Blank values are ignored."""
        if isinstance(uri, str) and uri.strip():
            self._platform_uris.add(uri)

    def set_position(self, position: Position3D | Mapping[str, Any] | Sequence[Any]) -> None:
        """Move the node; rejected coordinates leave the position unchanged."""
        coords = _coordinates(position)
        if coords is None or not all(_is_finite_number(c) for c in coords):
            logger.warning("Ignoring invalid position for %s: %r", self._identity, position)
            return
        x, y, z = coords
        self._position = Position3D(x=x, y=y, z=z)

    def average_play_duration(self) -> int:
        """Mean milliseconds per play, rounded half up; 0 with no plays."""
        if self._play_count <= 0:
            return 0
        return math.floor(self._total_play_time / self._play_count + 0.5)

    def formatted_total_time(self) -> str:
        """Total play time as M:SS, e.g. "9:00" or "13:45"."""
        total_seconds = int(self._total_play_time // 1000)
        minutes, seconds = divmod(total_seconds, 60)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": self._identity,
            "metadata": self._metadata.to_dict(),
            "play_count": self._play_count,
            "total_play_time": self._total_play_time,
            "average_play_duration": self.average_play_duration(),
            "formatted_total_time": self.formatted_total_time(),
            "platform_uris": sorted(self._platform_uris),
            "position": self._position.to_dict(),
        }


def _coordinates(position: Any) -> tuple[Any, Any, Any] | None:
    if isinstance(position, Position3D):
        return (position.x, position.y, position.z)
    if isinstance(position, Mapping):
        return (position.get("x"), position.get("y"), position.get("z"))
    if isinstance(position, Sequence) and not isinstance(position, str) and len(position) == 3:
        return (position[0], position[1], position[2])
    return None
