"""Scanning 16-byte windows of a JSON string for quotes, backslashes and control bytes."""

from __future__ import annotations

from dataclasses import dataclass

BLOCK_SIZE = 16
_M64 = (1 << 64) - 1
_SPACE = frozenset(b" \t\n\r")


def _window(data: bytes | bytearray | memoryview, offset: int) -> bytes:
    if not 0 <= offset <= len(data):
        raise ValueError("offset outside the data")
    return bytes(data[offset : offset + BLOCK_SIZE])


def _bits(window: bytes, predicate) -> int:
    return sum(1 << i for i, byte in enumerate(window) if predicate(byte))


def _trailing_zeros(bits: int) -> int:
    if bits == 0:
        return BLOCK_SIZE
    return (bits & -bits).bit_length() - 1


@dataclass(frozen=True)
class StringBlock:
    """Bitmasks of backslashes, quotes and unescaped control bytes in one window.

    Bit i refers to byte i of the window. Bytes past the end of the data set
    no bits. An index method returns BLOCK_SIZE when its mask is empty.
    """

    bs_bits: int
    quote_bits: int
    unescaped_bits: int

    @classmethod
    def find(cls, data: bytes | bytearray | memoryview, offset: int = 0) -> StringBlock:
        window = _window(data, offset)
        return cls(
            bs_bits=_bits(window, lambda b: b == 0x5C),
            quote_bits=_bits(window, lambda b: b == 0x22),
            unescaped_bits=_bits(window, lambda b: b <= 0x1F),
        )

    def has_quote_first(self) -> bool:
        """A quote comes before any backslash, with no control byte before it."""
        before_bs = (self.bs_bits - 1) & _M64
        return (before_bs & self.quote_bits) != 0 and not self.has_unescaped()

    def has_backslash(self) -> bool:
        """A backslash comes before the first quote."""
        return ((self.quote_bits - 1) & _M64 & self.bs_bits) != 0

    def has_unescaped(self) -> bool:
        """A control byte comes before the first quote."""
        return ((self.quote_bits - 1) & _M64 & self.unescaped_bits) != 0

    def quote_index(self) -> int:
        return _trailing_zeros(self.quote_bits)

    def bs_index(self) -> int:
        return _trailing_zeros(self.bs_bits)

    def unescaped_index(self) -> int:
        return _trailing_zeros(self.unescaped_bits)


def non_space_bits(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Bitmask of the bytes in the window at offset that are not JSON whitespace."""
    return _bits(_window(data, offset), lambda b: b not in _SPACE)