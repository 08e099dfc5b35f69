"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Optional

from playgraph.history.aggregate import RANK_KEYS
from playgraph.history.spotify import TRACK_URI_PREFIX


_DEFAULT_LOG_LEVEL = "WARNING"
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_DEFAULT_TOP_LIMIT = 10
_DEFAULT_RANK_BY = "plays"


@dataclass(frozen=True)
class Settings:
    track_uri_prefix: str = TRACK_URI_PREFIX
    log_level: str = _DEFAULT_LOG_LEVEL
    top_limit: int = _DEFAULT_TOP_LIMIT
    rank_by: str = _DEFAULT_RANK_BY


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (PLAYGRAPH_LOG_LEVEL, PLAYGRAPH_TOP_LIMIT)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values

    Raises:
        ValueError: If a resolved value is not supported
    """
    json_settings = {}
    if path and path.exists():
        json_settings = json.loads(path.read_text())

    log_level = os.getenv("PLAYGRAPH_LOG_LEVEL") or json_settings.get("log_level", _DEFAULT_LOG_LEVEL)
    log_level = str(log_level).upper()
    if log_level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {log_level}")

    raw_limit = os.getenv("PLAYGRAPH_TOP_LIMIT") or json_settings.get("top_limit", _DEFAULT_TOP_LIMIT)
    try:
        top_limit = int(raw_limit)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid top limit: {raw_limit!r}") from None
    if top_limit < 1:
        raise ValueError(f"Top limit must be positive: {top_limit}")

    rank_by = json_settings.get("rank_by", _DEFAULT_RANK_BY)
    if rank_by not in RANK_KEYS:
        raise ValueError(f"Unsupported ranking key: {rank_by}")

    prefix = json_settings.get("track_uri_prefix", TRACK_URI_PREFIX)
    if not isinstance(prefix, str) or not prefix:
        raise ValueError(f"Invalid track URI prefix: {prefix!r}")

    return Settings(
        track_uri_prefix=prefix,
        log_level=log_level,
        top_limit=top_limit,
        rank_by=rank_by,
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "playgraph" / "settings.json"
