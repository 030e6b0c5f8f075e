"""Node type flags and the packed type-and-length word."""

from __future__ import annotations

from enum import IntEnum

TOTAL_TYPE_BITS = 8
BASIC_TYPE_BITS = 3
BASIC_TYPE_MASK = 0x7
SUB_TYPE_BITS = 2
SUB_TYPE_MASK = 0x1F
INFO_BITS = 8
INFO_MASK = (1 << 8) - 1
OTHERS_BITS = 56
LENGTH_MASK = (0xFFFFFFFFFFFFFFFF << 8) & 0xFFFFFFFFFFFFFFFF
CONTAINER_MASK = 0x6

_MAX_LENGTH = 1 << OTHERS_BITS
_MAX_WORD = 1 << 64


class TypeFlag(IntEnum):
    """Three basic-type bits plus two sub-type bits.

    FALSE, UINT and STRING_COPY share their value with the basic type.
    """

    NULL = 0
    BOOL = 2
    NUMBER = 3
    STRING = 4
    RAW = 5
    OBJECT = 6
    ARRAY = 7

    FALSE = (0 << 3) | 2
    TRUE = (1 << 3) | 2
    UINT = (0 << 3) | 3
    SINT = (1 << 3) | 3
    REAL = (2 << 3) | 3
    STRING_COPY = 4
    STRING_FREE = (1 << 3) | 4
    STRING_CONST = (2 << 3) | 4

    def basic(self) -> TypeFlag:
        """The basic type, with sub-type bits removed."""
        return TypeFlag(self & BASIC_TYPE_MASK)

    def is_container(self) -> bool:
        return (self & CONTAINER_MASK) == CONTAINER_MASK

    def is_string_kind(self) -> bool:
        return self.basic() is TypeFlag.STRING

    def is_number_kind(self) -> bool:
        return self.basic() is TypeFlag.NUMBER


def pack_type_and_length(flag: TypeFlag | int, length: int) -> int:
    """Pack a type flag and a 56-bit length into one 64-bit word."""
    flag = TypeFlag(flag)
    if not 0 <= length < _MAX_LENGTH:
        raise ValueError(f"length {length} does not fit in {OTHERS_BITS} bits")
    return (length << INFO_BITS) | int(flag)


def unpack_type_and_length(word: int) -> tuple[TypeFlag, int]:
    """Split a packed word into its type flag and length."""
    if not 0 <= word < _MAX_WORD:
        raise ValueError(f"word {word} is not a 64-bit unsigned value")
    return TypeFlag(word & INFO_MASK), word >> INFO_BITS