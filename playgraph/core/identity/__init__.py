"""Identity canonicalization for playgraph.

Maps heterogeneous (artist, title, album) triples to one stable key.

See: playgraph.core.identity.canonicalize for the pure function API
"""

from .canonicalize import (
    IDENTITY_DELIMITER,
    normalize_text,
    make_identity,
    parse_identity,
    is_valid_metadata,
    coerce_metadata,
    safe_make_identity,
)

__all__ = [
    "IDENTITY_DELIMITER",
    "normalize_text",
    "make_identity",
    "parse_identity",
    "is_valid_metadata",
    "coerce_metadata",
    "safe_make_identity",
]
