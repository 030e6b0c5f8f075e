"""Whitespace helpers for the JSON grammar."""

from __future__ import annotations

from typing import Union

_SPACE_CODES = frozenset(b" \r\n\t")
_SPACE_CHARS = " \r\n\t"

_Text = Union[str, bytes, bytearray, memoryview]


def is_space(ch: int | str | bytes) -> bool:
    """True for the four JSON whitespace characters."""
    if isinstance(ch, (str, bytes)):
        if len(ch) != 1:
            raise ValueError("expected a single character")
        ch = ord(ch)
    return ch in _SPACE_CODES


def skip_space(data: _Text, pos: int = 0) -> int:
    """Index of the first non-whitespace character at or after pos, or len(data)."""
    if not 0 <= pos <= len(data):
        raise ValueError("position outside the data")
    if isinstance(data, str):
        rest = data[pos:].lstrip(_SPACE_CHARS)
    else:
        rest = bytes(data[pos:]).lstrip(_SPACE_CHARS.encode())
    return len(data) - len(rest)