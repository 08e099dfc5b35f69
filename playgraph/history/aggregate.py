"""Fold play events into per-identity TrackNodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import Optional

from playgraph.core.models import TrackPlay
from playgraph.core.track_node import TrackNode

logger = logging.getLogger(__name__)

RANK_KEYS = ("plays", "time")


def fold_play_events(
    events: Iterable[TrackPlay],
    nodes: Optional[MutableMapping[str, TrackNode]] = None,
) -> MutableMapping[str, TrackNode]:
    """Accumulate play events into TrackNodes keyed by canonical identity.

    The first event seen for an identity creates its node from that event's
    metadata; every event, the first included, records its play and URI.
    Counts and totals do not depend on event order.

    Args:
        events: Play events, in any order
        nodes: Existing nodes to extend in place (default: a new dict)

    Returns:
        The identity -> TrackNode mapping
    """
    if nodes is None:
        nodes = {}

    created = 0
    for event in events:
        node = nodes.get(event.identity)
        if node is None:
            node = TrackNode(event.identity, event.metadata)
            nodes[event.identity] = node
            created += 1
        node.record_play(event.ms_played)
        node.add_platform_uri(event.platform_uri)

    logger.debug("Folded play events: %d new nodes, %d total", created, len(nodes))
    return nodes


def rank_nodes(
    nodes: Iterable[TrackNode],
    *,
    by: str = "plays",
    limit: Optional[int] = None,
) -> list[TrackNode]:
    """Order nodes by play count or total play time, highest first.

    Ties are broken by identity so output is deterministic.
    """
    if by not in RANK_KEYS:
        raise ValueError(f"Unknown ranking key: {by}")

    if by == "plays":
        ranked = sorted(nodes, key=lambda node: (-node.play_count, -node.total_play_time, node.identity))
    else:
        ranked = sorted(nodes, key=lambda node: (-node.total_play_time, -node.play_count, node.identity))

    if limit is not None:
        ranked = ranked[: max(limit, 0)]
    return ranked
