"""Identify command - show the canonical identity for a track."""

from __future__ import annotations

from argparse import Namespace

from playgraph.commands.output import emit_output
from playgraph.core.identity import parse_identity, safe_make_identity
from playgraph.errors import ValidationError


def run_identify(args: Namespace, *, output_sink=print) -> int:
    """Compute and emit the identity key for --artist/--title/--album."""
    raw = {
        "artist": args.artist,
        "title": args.title,
        "album": getattr(args, "album", None),
    }
    identity = safe_make_identity(raw)
    if identity is None:
        raise ValidationError("artist and title are required")

    parsed = parse_identity(identity)
    payload = {
        "identity": identity,
        "artist": parsed.artist,
        "title": parsed.title,
        "album": parsed.album,
    }
    emit_output(
        command="identify",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(identity,),
    )
    return 0
