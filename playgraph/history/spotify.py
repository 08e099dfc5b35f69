"""Spotify "Extended Streaming History" ingestion.

An export is a JSON array of per-play records. Songs, podcast episodes and
audiobook chapters share the same record shape; only entries whose
``spotify_track_uri`` carries the track scheme are kept.

Example record (abridged):

    {
        "ts": "2023-04-01 18:22:05",
        "ms_played": 201573,
        "master_metadata_track_name": "Time Warp",
        "master_metadata_album_artist_name": "Cory Wong",
        "master_metadata_album_album_name": "Elevator Music for an Elevated Mood",
        "spotify_track_uri": "spotify:track:3B0DjZSziOEwHoBxamkD2y"
    }

See: https://support.spotify.com/us/article/understanding-my-data/
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from playgraph.core.identity import make_identity
from playgraph.core.models import TrackMetadata, TrackPlay
from playgraph.errors import HistoryFormatError

logger = logging.getLogger(__name__)

TRACK_URI_PREFIX = "spotify:track:"
HISTORY_FILE_PATTERN = "Streaming_History_Audio_*.json"

_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%SZ",
)


def is_track_entry(entry: Any, prefix: str = TRACK_URI_PREFIX) -> bool:
    """Check whether a raw record is a song play."""
    if not isinstance(entry, Mapping):
        return False
    uri = entry.get("spotify_track_uri")
    return isinstance(uri, str) and uri.startswith(prefix)


def filter_accepted_entries(records: Iterable[Any], prefix: str = TRACK_URI_PREFIX) -> list[dict]:
    """Keep only song plays, preserving order. Everything else is dropped."""
    return [dict(entry) for entry in records if is_track_entry(entry, prefix)]


def load_accepted_entries(source: str | Path, prefix: str = TRACK_URI_PREFIX) -> list[dict]:
    """Read one export file and return its song plays.

    The whole file is read before parsing. Read errors and malformed JSON
    propagate to the caller.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        HistoryFormatError: If the top-level JSON value is not an array
    """
    path = Path(source)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise HistoryFormatError(
            f"Expected a JSON array of history entries in {path}, got {type(data).__name__}"
        )

    accepted = filter_accepted_entries(data, prefix)
    logger.debug(
        "Loaded %s: %d entries, %d accepted, %d dropped",
        path,
        len(data),
        len(accepted),
        len(data) - len(accepted),
    )
    return accepted


def iter_history_files(path: str | Path) -> list[Path]:
    """Resolve an export file or directory to a sorted list of history files.

    Directories are searched recursively so the nested
    "Spotify Extended Streaming History" folder of a raw export is found.
    """
    path = Path(path)
    if not path.is_dir():
        return [path]
    return sorted(p for p in path.rglob(HISTORY_FILE_PATTERN) if p.is_file())


def parse_timestamp(value: Any) -> int:
    """Convert an export timestamp (UTC) to epoch milliseconds.

    Raises:
        HistoryFormatError: If the value is not a recognised timestamp
    """
    if not isinstance(value, str):
        raise HistoryFormatError(f"Missing or non-text timestamp: {value!r}")

    for fmt in _TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return int(parsed.replace(tzinfo=timezone.utc).timestamp()) * 1000

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise HistoryFormatError(f"Unrecognised timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return round(parsed.timestamp() * 1000)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _ms_played(value: Any) -> int | float:
    # null, missing, non-numeric and negative durations all count as a skip
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        return 0
    return value


def to_play_events(entries: Iterable[Mapping[str, Any]]) -> list[TrackPlay]:
    """Map accepted entries one-to-one onto play events, preserving order.

    Missing names stay empty strings here; placeholder labels are applied
    later, when a TrackNode is built.
    """
    events: list[TrackPlay] = []
    for entry in entries:
        metadata = TrackMetadata(
            artist=_text(entry.get("master_metadata_album_artist_name")),
            title=_text(entry.get("master_metadata_track_name")),
            album=_text(entry.get("master_metadata_album_album_name")),
        )
        events.append(
            TrackPlay(
                timestamp_ms=parse_timestamp(entry.get("ts")),
                identity=make_identity(metadata),
                metadata=metadata,
                platform_uri=_text(entry.get("spotify_track_uri")),
                ms_played=_ms_played(entry.get("ms_played")),
            )
        )
    return events
