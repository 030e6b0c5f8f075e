"""Quoting strings as JSON string literals."""

from __future__ import annotations

import re
from typing import overload

_NAMED = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_ESCAPES = {chr(code): _NAMED.get(chr(code), f"\\u{code:04x}") for code in range(0x20)}
_ESCAPES.update(_NAMED)
_BYTE_ESCAPES = {ord(k): v.encode("ascii") for k, v in _ESCAPES.items()}

_NEEDS_ESCAPE = re.compile('["\\\\\x00-\x1f]')
_NEEDS_ESCAPE_BYTES = re.compile(b'["\\\\\x00-\x1f]')


@overload
def quote(data: str) -> str: ...


@overload
def quote(data: bytes | bytearray | memoryview) -> bytes: ...


def quote(data):
    """Wrap data in double quotes, escaping quotes, backslashes and control characters.

    Other characters, including non-ASCII ones, are copied unchanged.
    Text gives text; bytes give bytes.
    """
    if isinstance(data, str):
        body = _NEEDS_ESCAPE.sub(lambda m: _ESCAPES[m.group()], data)
        return f'"{body}"'
    raw = bytes(data)
    body = _NEEDS_ESCAPE_BYTES.sub(lambda m: _BYTE_ESCAPES[m.group()[0]], raw)
    return b'"' + body + b'"'