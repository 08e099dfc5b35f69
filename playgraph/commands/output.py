"""Deterministic CLI output helpers."""

from __future__ import annotations

import json
from typing import Iterable

from playgraph import __version__
from playgraph.core.track_node import TrackNode

SCHEMA_VERSION = "v1"


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    """Emit one JSON envelope, or the human-readable lines."""
    if not json_output:
        for line in human_lines:
            output_sink(line)
        return

    envelope = {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "command": command,
        "data": payload,
    }
    output_sink(json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=True))


def node_line(rank: int, node: TrackNode) -> str:
    """One ranked summary row, e.g. "1. Cory Wong - Time Warp (3 plays, 9:00)"."""
    metadata = node.metadata
    plays = "play" if node.play_count == 1 else "plays"
    return (
        f"{rank}. {metadata.artist} - {metadata.title} "
        f"({node.play_count} {plays}, {node.formatted_total_time()})"
    )
