"""Command-line interface for playgraph."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from . import __version__
from .history.aggregate import RANK_KEYS


def _load_dotenv_files() -> None:
    """Load a .env file from the working directory without overriding the environment."""
    load_dotenv(Path.cwd() / ".env", override=False)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playgraph",
        description="Reconcile streaming history into cross-platform track statistics",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"playgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings path (default: ~/.config/playgraph/settings.json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level for this run",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    summarize_parser = subparsers.add_parser(
        "summarize",
        help="Aggregate Spotify streaming history exports into top tracks",
    )
    summarize_parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Export files or directories containing Streaming_History_Audio_*.json",
    )
    summarize_parser.add_argument(
        "--limit",
        type=int,
        help="Number of tracks to show (default: settings top_limit)",
    )
    summarize_parser.add_argument(
        "--by",
        choices=list(RANK_KEYS),
        help="Rank by play count or total play time",
    )
    summarize_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    identify_parser = subparsers.add_parser(
        "identify",
        help="Print the canonical identity for a track",
    )
    identify_parser.add_argument("--artist", required=True, help="Artist name")
    identify_parser.add_argument("--title", required=True, help="Track title")
    identify_parser.add_argument("--album", help="Album name")
    identify_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        _load_dotenv_files()

        from .settings import default_config_path, load_settings

        settings = load_settings(args.config or default_config_path())
        _configure_logging(args.log_level or settings.log_level)

        if args.command == "summarize":
            from .commands.summarize import run_summarize
            return run_summarize(args, settings=settings)
        elif args.command == "identify":
            from .commands.identify import run_identify
            return run_identify(args)
        else:
            parser.print_help()
            return 1
    except Exception as exc:
        from .errors import exit_code_for_exception

        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
