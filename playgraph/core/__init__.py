"""Core identity and aggregation types."""

from .models import ParsedIdentity, Position3D, TrackMetadata, TrackPlay
from .track_node import TrackNode

__all__ = [
    "ParsedIdentity",
    "Position3D",
    "TrackMetadata",
    "TrackPlay",
    "TrackNode",
]
