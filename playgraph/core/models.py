"""Core data models for playgraph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    """Artist/title/album triple as reported by a streaming platform.

    Values keep the platform's raw casing and punctuation; nothing here is
    normalized or defaulted.
    """
    artist: str
    title: str
    album: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        return {
            "artist": self.artist,
            "title": self.title,
            "album": self.album or "",
        }


@dataclass(frozen=True, slots=True)
class ParsedIdentity:
    """Normalized segments recovered from a canonical identity key."""
    artist: str = ""
    title: str = ""
    album: str = ""


@dataclass(frozen=True, slots=True)
class Position3D:
    """Placement of a track in the visualization space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True, slots=True)
class TrackPlay:
    """A single accepted listen, prior to aggregation.

    ms_played of 0 denotes a skip.
    """
    timestamp_ms: int
    identity: str
    metadata: TrackMetadata
    platform_uri: str
    ms_played: int | float = 0
