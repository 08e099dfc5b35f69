"""Summarize command - fold streaming history exports into ranked tracks."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
import logging

from playgraph.commands.output import emit_output, node_line
from playgraph.errors import IOFailure
from playgraph.history.aggregate import fold_play_events, rank_nodes
from playgraph.history.spotify import iter_history_files, load_accepted_entries, to_play_events
from playgraph.settings import Settings

logger = logging.getLogger(__name__)


def _resolve_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if not path.exists():
            raise IOFailure(f"History path does not exist: {path}")
        found = iter_history_files(path)
        if not found:
            logger.warning("No streaming history files under %s", path)
        files.extend(found)
    # overlapping arguments (a directory and a file inside it) load once
    return list(dict.fromkeys(p.resolve() for p in files))


def run_summarize(
    args: Namespace,
    *,
    settings: Settings | None = None,
    output_sink=print,
) -> int:
    """Load every export, aggregate plays per identity and emit the top tracks."""
    settings = settings or Settings()
    limit = args.limit if getattr(args, "limit", None) is not None else settings.top_limit
    rank_by = getattr(args, "by", None) or settings.rank_by

    files = _resolve_files([Path(p) for p in args.paths])
    nodes: dict = {}
    event_count = 0
    for path in files:
        entries = load_accepted_entries(path, settings.track_uri_prefix)
        events = to_play_events(entries)
        event_count += len(events)
        fold_play_events(events, nodes)

    ranked = rank_nodes(nodes.values(), by=rank_by, limit=limit)
    payload = {
        "files": [str(path) for path in files],
        "play_events": event_count,
        "tracks": len(nodes),
        "rank_by": rank_by,
        "top": [node.to_dict() for node in ranked],
    }
    human_lines = [f"summarize: files={len(files)} plays={event_count} tracks={len(nodes)}"]
    human_lines.extend(node_line(rank, node) for rank, node in enumerate(ranked, start=1))

    emit_output(
        command="summarize",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
