"""Pure canonicalization functions for cross-platform track identity.

A canonical identity is the key under which plays of the same song are
reconciled, however each platform spells, punctuates or cases it:

    normalized_artist::normalized_title::normalized_album

Normalization is deliberately ASCII-only: lowercase, every character that is
not an ASCII letter, ASCII digit or whitespace becomes a space, whitespace
runs collapse, and the result is stripped. Accented and non-Latin text
degrades to whatever survives that allow-list. No Unicode folding is done.

All functions are pure and never raise on bad input.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..models import ParsedIdentity, TrackMetadata


# Never produced by normalize_text: ":" is outside its allow-list
IDENTITY_DELIMITER = "::"

_DISALLOWED_PATTERN = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_text(value: str | None) -> str:
    """Normalize a metadata field for identity comparison.

    Args:
        value: Raw field value; None, empty and non-string input are absent

    Returns:
        Normalized text, or "" for absent input

    Examples:
        >>> normalize_text("The Beatles!")
        'the beatles'
        >>> normalize_text("  Multiple   Spaces  ")
        'multiple spaces'
        >>> normalize_text(None)
        ''
    """
    if not value or not isinstance(value, str):
        return ""

    cleaned = value.lower()
    cleaned = _DISALLOWED_PATTERN.sub(" ", cleaned)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned)

    return cleaned.strip()


def make_identity(metadata: TrackMetadata) -> str:
    """Create the canonical identity key for a track.

    Examples:
        >>> make_identity(TrackMetadata("The Beatles", "Hey Jude", "The Beatles 1967-1970"))
        'the beatles::hey jude::the beatles 1967 1970'
        >>> make_identity(TrackMetadata("Radiohead", "Creep"))
        'radiohead::creep::'
    """
    return IDENTITY_DELIMITER.join(
        (
            normalize_text(metadata.artist),
            normalize_text(metadata.title),
            normalize_text(metadata.album or ""),
        )
    )


def parse_identity(identity: str) -> ParsedIdentity:
    """Split an identity key back into its normalized segments.

    Only the first three segments are used. Anything after a third
    delimiter is dropped, so keys built from pre-normalized or malformed
    text may lose album content.

    Examples:
        >>> parse_identity("radiohead::creep::")
        ParsedIdentity(artist='radiohead', title='creep', album='')
        >>> parse_identity("artist::title::album::extra")
        ParsedIdentity(artist='artist', title='title', album='album')
    """
    if not isinstance(identity, str):
        identity = ""

    parts = identity.split(IDENTITY_DELIMITER)
    parts += [""] * (3 - len(parts))

    return ParsedIdentity(artist=parts[0], title=parts[1], album=parts[2])


def is_valid_metadata(value: Any) -> bool:
    """Check that an untrusted value has the TrackMetadata structure.

    Accepts a TrackMetadata or a mapping with string ``artist`` and
    ``title``; ``album`` may be missing, None, or a string.
    """
    if isinstance(value, TrackMetadata):
        artist, title, album = value.artist, value.title, value.album
    elif isinstance(value, Mapping):
        artist, title, album = value.get("artist"), value.get("title"), value.get("album")
    else:
        return False

    return (
        isinstance(artist, str)
        and isinstance(title, str)
        and (album is None or isinstance(album, str))
    )


def coerce_metadata(value: Any) -> TrackMetadata | None:
    """Validate an untrusted value and build TrackMetadata from it.

    Returns:
        TrackMetadata copy of the validated fields, or None if invalid
    """
    if not is_valid_metadata(value):
        return None
    if isinstance(value, TrackMetadata):
        return value
    return TrackMetadata(
        artist=value["artist"],
        title=value["title"],
        album=value.get("album"),
    )


def safe_make_identity(value: Any) -> str | None:
    """Create an identity from untrusted input.

    This is the entry point for external data.

    Examples:
        >>> safe_make_identity({"artist": "Test", "title": "Song"})
        'test::song::'
        >>> safe_make_identity({"invalid": "data"}) is None
        True
    """
    metadata = coerce_metadata(value)
    if metadata is None:
        return None
    return make_identity(metadata)
