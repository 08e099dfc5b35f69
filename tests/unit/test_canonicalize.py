"""Unit tests for track identity canonicalization."""

from __future__ import annotations

import pytest

from playgraph.core.identity import (
    IDENTITY_DELIMITER,
    coerce_metadata,
    is_valid_metadata,
    make_identity,
    normalize_text,
    parse_identity,
    safe_make_identity,
)
from playgraph.core.models import ParsedIdentity, TrackMetadata


pytestmark = pytest.mark.unit


# ============================================================================
# normalize_text
# ============================================================================


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("THE BEATLES", "the beatles"),
        ("The Beatles!", "the beatles"),
        ("AC/DC - Back in Black!", "ac dc back in black"),
        ("  Multiple   Spaces  ", "multiple spaces"),
        ("Hey\tJude\n", "hey jude"),
        ("Track 123 Mix", "track 123 mix"),
        ("Song@#$%^&*()_+-=[]{}|;:,.<>?", "song"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_text_common_variants(raw, expected):
    assert normalize_text(raw) == expected


def test_normalize_text_is_ascii_only():
    # Accented and non-Latin characters are not folded, they become spaces
    assert normalize_text("Björk") == "bj rk"
    assert normalize_text("Sigur Rós") == "sigur r s"
    assert normalize_text("坂本龍一") == ""


def test_normalize_text_treats_non_strings_as_absent():
    assert normalize_text(123) == ""  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "raw",
    ["The Beatles 1967-1970", "  AC/DC!!! ", "Björk", "a::b::c", " nbsp space", ""],
)
def test_normalize_text_is_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_normalized_text_never_contains_delimiter():
    assert IDENTITY_DELIMITER not in normalize_text("a::b:::c")


# ============================================================================
# make_identity / parse_identity
# ============================================================================


class TestMakeIdentity:
    def test_all_fields(self):
        metadata = TrackMetadata("The Beatles", "Hey Jude", "The Beatles 1967-1970")
        assert make_identity(metadata) == "the beatles::hey jude::the beatles 1967 1970"

    def test_without_album(self):
        assert make_identity(TrackMetadata("Radiohead", "Creep")) == "radiohead::creep::"

    def test_empty_album(self):
        assert make_identity(TrackMetadata("Artist Name", "Song Title", "")) == "artist name::song title::"

    def test_special_characters(self):
        metadata = TrackMetadata("AC/DC", "Back in Black!", "Back in Black (Remastered)")
        assert make_identity(metadata) == "ac dc::back in black::back in black remastered"

    def test_platform_spellings_collapse_to_one_identity(self):
        variants = [
            TrackMetadata("Guns N' Roses", "Sweet Child O' Mine", "Appetite for Destruction"),
            TrackMetadata("GUNS N ROSES", "Sweet  Child O Mine", "appetite for destruction"),
            TrackMetadata("guns n' roses", "sweet child o' mine!", "Appetite For Destruction."),
        ]
        assert len({make_identity(m) for m in variants}) == 1

    def test_album_delimiter_is_neutralized(self):
        identity = make_identity(TrackMetadata("a", "b", "x::y"))
        assert identity == "a::b::x y"
        assert identity.count(IDENTITY_DELIMITER) == 2


class TestParseIdentity:
    def test_complete_identity(self):
        assert parse_identity("the beatles::hey jude::the beatles 1967 1970") == ParsedIdentity(
            artist="the beatles", title="hey jude", album="the beatles 1967 1970"
        )

    def test_identity_without_album(self):
        assert parse_identity("radiohead::creep::") == ParsedIdentity("radiohead", "creep", "")

    @pytest.mark.parametrize(
        "identity, expected",
        [
            ("artist::", ParsedIdentity("artist", "", "")),
            ("artist", ParsedIdentity("artist", "", "")),
            ("", ParsedIdentity("", "", "")),
            ("artist::title::album::extra", ParsedIdentity("artist", "title", "album")),
        ],
    )
    def test_malformed_identities(self, identity, expected):
        assert parse_identity(identity) == expected

    def test_non_string_input(self):
        assert parse_identity(None) == ParsedIdentity()  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "metadata",
        [
            TrackMetadata("The Beatles", "Hey Jude", "The Beatles 1967-1970"),
            TrackMetadata("AC/DC!!!", "Back   in    Black", "Back in Black (Remastered) [2003]"),
            TrackMetadata("Radiohead", "Creep"),
        ],
    )
    def test_parse_recovers_normalized_fields(self, metadata):
        parsed = parse_identity(make_identity(metadata))
        assert parsed == ParsedIdentity(
            artist=normalize_text(metadata.artist),
            title=normalize_text(metadata.title),
            album=normalize_text(metadata.album or ""),
        )


# ============================================================================
# Untrusted input
# ============================================================================


class TestIsValidMetadata:
    @pytest.mark.parametrize(
        "value",
        [
            {"artist": "The Beatles", "title": "Hey Jude", "album": "The Beatles 1967-1970"},
            {"artist": "Radiohead", "title": "Creep"},
            {"artist": "The Beatles", "title": "Hey Jude", "album": None},
            {"artist": "", "title": ""},
            TrackMetadata("Radiohead", "Creep"),
        ],
    )
    def test_accepts(self, value):
        assert is_valid_metadata(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "string",
            123,
            True,
            ["The Beatles", "Hey Jude"],
            {"title": "Hey Jude"},
            {"artist": "The Beatles"},
            {"artist": 123, "title": "Hey Jude"},
            {"artist": "The Beatles", "title": 123},
            {"artist": "The Beatles", "title": "Hey Jude", "album": 123},
            TrackMetadata(None, "Creep"),  # type: ignore[arg-type]
        ],
    )
    def test_rejects(self, value):
        assert is_valid_metadata(value) is False


class TestCoerceMetadata:
    def test_builds_metadata_from_mapping(self):
        raw = {"artist": "Radiohead", "title": "Creep", "extra": 1}
        metadata = coerce_metadata(raw)
        raw["artist"] = "Changed"
        assert metadata == TrackMetadata("Radiohead", "Creep", None)

    def test_rejects_invalid(self):
        assert coerce_metadata({"invalid": "data"}) is None


class TestSafeMakeIdentity:
    def test_valid_metadata(self):
        value = {"artist": "The Beatles", "title": "Hey Jude", "album": "The Beatles 1967-1970"}
        assert safe_make_identity(value) == "the beatles::hey jude::the beatles 1967 1970"

    def test_empty_strings(self):
        assert safe_make_identity({"artist": "", "title": "", "album": ""}) == "::::"

    @pytest.mark.parametrize("value", [{"artist": "The Beatles"}, None, "string", 123, True])
    def test_invalid_input_returns_none(self, value):
        assert safe_make_identity(value) is None
