"""Partial token extraction at the cursor."""

from __future__ import annotations

from typing import NamedTuple

from .errors import InvalidArgumentError


class PartialToken(NamedTuple):
    """The in-progress word before the cursor and where it starts."""

    token: str
    start: int


def is_identifier_char(char: str) -> bool:
    """Letters, digits (any script) and underscore continue an identifier."""
    return char.isalnum() or char == "_"


def validate_cursor(buffer: str, cursor: int) -> None:
    """Raise InvalidArgumentError unless ``0 <= cursor <= len(buffer)``."""
    if not isinstance(buffer, str):
        raise InvalidArgumentError(f"buffer must be a str, got {type(buffer).__name__}")
    # bool is an int subclass but never a meaningful offset
    if isinstance(cursor, bool) or not isinstance(cursor, int):
        raise InvalidArgumentError(f"cursor must be an int, got {type(cursor).__name__}")
    if cursor < 0 or cursor > len(buffer):
        raise InvalidArgumentError(f"cursor {cursor} outside buffer of length {len(buffer)}")


def extract_partial_token(buffer: str, cursor: int) -> PartialToken:
    """Return the identifier run ending at ``cursor``.

    Text after the cursor is ignored, so completion works mid-line.
    A cursor at 0 or right after whitespace/punctuation yields an empty
    token starting at the cursor.

    >>> extract_partial_token("SELECT * FROM ord", 17)
    PartialToken(token='ord', start=14)
    >>> extract_partial_token("a, b", 2)
    PartialToken(token='', start=2)
    """
    validate_cursor(buffer, cursor)
    start = cursor
    while start > 0 and is_identifier_char(buffer[start - 1]):
        start -= 1
    return PartialToken(buffer[start:cursor], start)
