"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Generator

import pytest


def _history_entry(
    *,
    ts: str = "2023-04-01 18:22:05",
    ms_played: Any = 180000,
    track: Any = "Time Warp",
    artist: Any = "Cory Wong",
    album: Any = "Elevator Music for an Elevated Mood",
    uri: Any = "spotify:track:3B0DjZSziOEwHoBxamkD2y",
    **extra: Any,
) -> dict:
    entry = {
        "ts": ts,
        "platform": "Android OS",
        "ms_played": ms_played,
        "conn_country": "US",
        "master_metadata_track_name": track,
        "master_metadata_album_artist_name": artist,
        "master_metadata_album_album_name": album,
        "spotify_track_uri": uri,
        "episode_name": None,
        "spotify_episode_uri": None,
        "reason_start": "trackdone",
        "reason_end": "trackdone",
        "shuffle": False,
        "skipped": False,
    }
    entry.update(extra)
    return entry


def _episode_entry(ts: str = "2023-04-01 19:00:00", ms_played: int = 1200000) -> dict:
    return _history_entry(
        ts=ts,
        ms_played=ms_played,
        track=None,
        artist=None,
        album=None,
        uri=None,
        episode_name="Episode 12",
        spotify_episode_uri="spotify:episode:5sdfp1Lw3cJ8k8wOsMtVUR",
    )


@pytest.fixture
def history_entry() -> Callable[..., dict]:
    """Factory for raw Spotify extended streaming history records."""
    return _history_entry


@pytest.fixture
def episode_entry() -> Callable[..., dict]:
    """Factory for podcast episode records from the same export."""
    return _episode_entry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmpdir = Path(tempfile.mkdtemp())
    try:
        yield tmpdir
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def write_export(temp_dir: Path) -> Callable[..., Path]:
    """Write a list of records as an export file and return its path."""
    def _write(records: Any, name: str = "Streaming_History_Audio_2023.json") -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write
