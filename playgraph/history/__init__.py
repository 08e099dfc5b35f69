"""Streaming history ingestion and aggregation."""

from .aggregate import fold_play_events, rank_nodes
from .spotify import (
    TRACK_URI_PREFIX,
    filter_accepted_entries,
    is_track_entry,
    iter_history_files,
    load_accepted_entries,
    parse_timestamp,
    to_play_events,
)

__all__ = [
    "TRACK_URI_PREFIX",
    "filter_accepted_entries",
    "fold_play_events",
    "is_track_entry",
    "iter_history_files",
    "load_accepted_entries",
    "parse_timestamp",
    "rank_nodes",
    "to_play_events",
]
