"""Errors raised by playgraph and the CLI exit code each one maps to.

Exit codes: 0 success, 1 unexpected failure, 2 bad input (arguments,
settings values, malformed or mis-shaped exports), 3 unreadable paths.
"""

from __future__ import annotations

import json


class PlaygraphError(Exception):
    """Base class; ``exit_code`` is what ``playgraph`` returns for it."""

    exit_code: int = 1


class ValidationError(PlaygraphError):
    """Arguments or input data that cannot be processed as given."""

    exit_code = 2


class HistoryFormatError(ValidationError):
    """A streaming history export does not have the expected structure."""


class RuntimeFailure(PlaygraphError):
    """A failure not caused by the user's input."""

    exit_code = 1


class IOFailure(PlaygraphError):
    """A history path is missing or cannot be read."""

    exit_code = 3


def exit_code_for_exception(exc: BaseException) -> int:
    """Map any exception reaching the CLI to its exit code.

    Exceptions from outside the taxonomy are classified too: OSError counts
    as an I/O failure and a JSON decoding error as bad input.
    """
    if isinstance(exc, PlaygraphError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    if isinstance(exc, json.JSONDecodeError):
        return ValidationError.exit_code
    return RuntimeFailure.exit_code
