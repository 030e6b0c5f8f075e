"""Error codes reported by parsing and serialisation, and the exception that carries them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SonicError(IntEnum):
    """Numeric error codes; zero means success."""

    NONE = 0
    PARSE_ERROR_EOF = 1
    PARSE_ERROR_INVALID_CHAR = 2
    PARSE_ERROR_INFINITY = 3
    PARSE_ERROR_UNESCAPED = 4
    PARSE_ERROR_ESCAPED_FORMAT = 5
    PARSE_ERROR_ESCAPED_UNICODE = 6
    PARSE_ERROR_INVALID_UTF8 = 7
    PARSE_ERROR_UNKNOWN_OBJ_KEY = 8
    PARSE_ERROR_ARR_INDEX_OUT_OF_RANGE = 9
    PARSE_ERROR_MISMATCH_TYPE = 10
    SER_ERROR_UNSUPPORTED_TYPE = 11
    SER_ERROR_INFINITY = 12
    SER_ERROR_INVALID_OBJ_KEY = 13
    NO_MEM = 14
    PARSE_ERROR_UNEXPECT = 15

    def message(self) -> str:
        """Human-readable description of this error."""
        return _MESSAGES[self]


_MESSAGES = {
    SonicError.NONE: "No errors",
    SonicError.PARSE_ERROR_EOF: "Parse: JSON is empty or truncated.",
    SonicError.PARSE_ERROR_INVALID_CHAR: "Parse: JSON has invalid chars, e.g. 1.2x.",
    SonicError.PARSE_ERROR_INFINITY: "Parse: JSON number is infinity.",
    SonicError.PARSE_ERROR_UNESCAPED: (
        "Parse: JSON string has unescaped control chars (\\x00 ~ \\x1f)."
    ),
    SonicError.PARSE_ERROR_ESCAPED_FORMAT: (
        'Parse: JSON string has wrong escaped format, e.g."\\g"'
    ),
    SonicError.PARSE_ERROR_ESCAPED_UNICODE: (
        'Parse: JSON string has wrong escaped unicode, e.g. "\\uD800"'
    ),
    SonicError.PARSE_ERROR_INVALID_UTF8: (
        'Parse: JSON string has wrong escaped unicode, e.g. "\\xff\\xff"'
    ),
    SonicError.PARSE_ERROR_UNKNOWN_OBJ_KEY: (
        "ParseOnDemand: Not found the target keys in object."
    ),
    SonicError.PARSE_ERROR_ARR_INDEX_OUT_OF_RANGE: (
        "ParseOnDemand: the target array index out of range."
    ),
    SonicError.PARSE_ERROR_MISMATCH_TYPE: (
        "ParseOnDemand: the target type is not matched."
    ),
    SonicError.SER_ERROR_UNSUPPORTED_TYPE: "Serialize: DOM has invalid node type.",
    SonicError.SER_ERROR_INFINITY: "Serialize: DOM has inifinity number node.",
    SonicError.SER_ERROR_INVALID_OBJ_KEY: (
        "Serialize: The type of object's key is not string."
    ),
    SonicError.NO_MEM: "Memory is not enough to allocate.",
    SonicError.PARSE_ERROR_UNEXPECT: "Unexpected Errors",
}


def error_msg(error: SonicError | int) -> str:
    """Return the message for an error code; raise ValueError for unknown codes."""
    return SonicError(error).message()


class SonicJsonError(Exception):
    """Raised when parsing or serialisation fails."""

    def __init__(self, error: SonicError | int, offset: int = 0) -> None:
        self.error = SonicError(error)
        self.offset = offset
        super().__init__(f"{self.error.message()} (offset {offset})")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse: an error code and the offset where parsing stopped."""

    error: SonicError = SonicError.NONE
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "error", SonicError(self.error))

    def ok(self) -> bool:
        """True when no error was recorded."""
        return self.error is SonicError.NONE

    def raise_for_error(self) -> None:
        """Raise SonicJsonError if this result holds an error."""
        if not self.ok():
            raise SonicJsonError(self.error, self.offset)