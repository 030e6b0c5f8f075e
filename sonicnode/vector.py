"""Fixed-width byte vectors with lane-wise arithmetic, comparisons and bitmasks."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Union

WIDTHS = (16, 32)
LANE = 16

_Operand = Union["ByteVector", int]


def _signed(byte: int) -> int:
    return byte - 256 if byte >= 128 else byte


def _mask(flags: Iterable[bool]) -> bytes:
    return bytes(0xFF if flag else 0 for flag in flags)


class ByteVector:
    """An immutable vector of 16 or 32 unsigned bytes.

    Comparison methods return mask vectors whose bytes are 0xFF where the
    comparison holds and 0x00 elsewhere; ``to_bitmask`` turns a mask into an
    integer with bit i taken from the high bit of byte i.
    """

    __slots__ = ("_bytes",)

    def __init__(self, values: Iterable[int], width: int | None = None) -> None:
        data = bytes(values)
        if width is None:
            width = len(data)
        if width not in WIDTHS:
            raise ValueError(f"width must be one of {WIDTHS}, not {width}")
        if len(data) != width:
            raise ValueError(f"expected {width} bytes, got {len(data)}")
        self._bytes = data

    # construction

    @classmethod
    def splat(cls, value: int | bool, width: int = 32) -> ByteVector:
        """A vector with every byte set to value (True gives 0xFF)."""
        if isinstance(value, bool):
            value = 0xFF if value else 0
        if not -128 <= value <= 255:
            raise ValueError(f"{value} does not fit in a byte")
        return cls(bytes([value & 0xFF]) * width, width)

    @classmethod
    def load(cls, data: bytes | bytearray | memoryview, offset: int = 0, width: int = 32) -> ByteVector:
        """Read width bytes from data starting at offset."""
        if offset < 0 or offset + width > len(data):
            raise ValueError("not enough bytes to load a full vector")
        return cls(bytes(data[offset : offset + width]), width)

    @classmethod
    def zero(cls, width: int = 32) -> ByteVector:
        return cls.splat(0, width)

    # access

    @property
    def width(self) -> int:
        return len(self._bytes)

    def store(self) -> bytes:
        """The bytes of this vector."""
        return self._bytes

    def __bytes__(self) -> bytes:
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bytes)

    def __getitem__(self, index: int) -> int:
        return self._bytes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteVector):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f"ByteVector({self._bytes.hex()}, width={self.width})"

    # helpers

    def _coerce(self, other: _Operand) -> ByteVector:
        if isinstance(other, ByteVector):
            if other.width != self.width:
                raise ValueError("vectors have different widths")
            return other
        if isinstance(other, int):
            return ByteVector.splat(other, self.width)
        raise TypeError(f"cannot combine a vector with {type(other).__name__}")

    def _zip(self, other: _Operand) -> Iterator[tuple[int, int]]:
        return zip(self._bytes, self._coerce(other)._bytes)

    def _new(self, data: bytes) -> ByteVector:
        return ByteVector(data, self.width)

    # bit operations

    def __or__(self, other: _Operand) -> ByteVector:
        return self._new(bytes(a | b for a, b in self._zip(other)))

    def __and__(self, other: _Operand) -> ByteVector:
        return self._new(bytes(a & b for a, b in self._zip(other)))

    def __xor__(self, other: _Operand) -> ByteVector:
        return self._new(bytes(a ^ b for a, b in self._zip(other)))

    def __invert__(self) -> ByteVector:
        return self._new(bytes(a ^ 0xFF for a in self._bytes))

    def bit_andnot(self, other: _Operand) -> ByteVector:
        """self & ~other."""
        return self._new(bytes(a & ~b & 0xFF for a, b in self._zip(other)))

    # arithmetic

    def __add__(self, other: _Operand) -> ByteVector:
        return self._new(bytes((a + b) & 0xFF for a, b in self._zip(other)))

    def __sub__(self, other: _Operand) -> ByteVector:
        return self._new(bytes((a - b) & 0xFF for a, b in self._zip(other)))

    def saturating_add(self, other: _Operand) -> ByteVector:
        return self._new(bytes(min(a + b, 0xFF) for a, b in self._zip(other)))

    def saturating_sub(self, other: _Operand) -> ByteVector:
        return self._new(bytes(max(a - b, 0) for a, b in self._zip(other)))

    def max_val(self, other: _Operand) -> ByteVector:
        return self._new(bytes(max(a, b) for a, b in self._zip(other)))

    def min_val(self, other: _Operand) -> ByteVector:
        return self._new(bytes(min(a, b) for a, b in self._zip(other)))

    # comparisons (masks)

    def signed_gt(self, other: _Operand) -> ByteVector:
        """Mask of bytes greater than other, read as signed bytes."""
        return self._new(_mask(_signed(a) > _signed(b) for a, b in self._zip(other)))

    def signed_lt(self, other: _Operand) -> ByteVector:
        """Mask of bytes less than other, read as signed bytes."""
        return self._new(_mask(_signed(a) < _signed(b) for a, b in self._zip(other)))

    def eq(self, other: _Operand) -> ByteVector:
        return self._new(_mask(a == b for a, b in self._zip(other)))

    def lteq(self, other: _Operand) -> ByteVector:
        return self._new(_mask(a <= b for a, b in self._zip(other)))

    def gteq(self, other: _Operand) -> ByteVector:
        return self._new(_mask(a >= b for a, b in self._zip(other)))

    def gt(self, other: _Operand) -> ByteVector:
        return self._new(_mask(a > b for a, b in self._zip(other)))

    def lt(self, other: _Operand) -> ByteVector:
        return self._new(_mask(a < b for a, b in self._zip(other)))

    # bit tests

    def _selected(self, bits: _Operand | None) -> ByteVector:
        return self if bits is None else self & bits

    def bits_not_set(self, bits: _Operand | None = None) -> ByteVector:
        """Mask of bytes with none of the given bits (or no bits at all) set."""
        return self._new(_mask(a == 0 for a in self._selected(bits)._bytes))

    def any_bits_set(self, bits: _Operand | None = None) -> ByteVector:
        """Mask of bytes with at least one of the given bits set."""
        return ~self.bits_not_set(bits)

    def is_ascii(self) -> bool:
        return all(a < 0x80 for a in self._bytes)

    def bits_not_set_anywhere(self, bits: _Operand | None = None) -> bool:
        return not any(self._selected(bits)._bytes)

    def any_bits_set_anywhere(self, bits: _Operand | None = None) -> bool:
        return not self.bits_not_set_anywhere(bits)

    # shifts and masks

    def shr(self, n: int) -> ByteVector:
        """Shift every byte right by n bits."""
        if not 0 <= n <= 7:
            raise ValueError("shift must be between 0 and 7")
        return self._new(bytes(a >> n for a in self._bytes))

    def shl(self, n: int) -> ByteVector:
        """Shift every byte left by n bits, dropping the overflow."""
        if not 0 <= n <= 7:
            raise ValueError("shift must be between 0 and 7")
        return self._new(bytes((a << n) & 0xFF for a in self._bytes))

    def get_bit(self, n: int) -> int:
        """Integer whose bit i is bit n of byte i."""
        if not 0 <= n <= 7:
            raise ValueError("bit index must be between 0 and 7")
        return sum(((a >> n) & 1) << i for i, a in enumerate(self._bytes))

    def to_bitmask(self) -> int:
        """Integer whose bit i is the high bit of byte i."""
        return self.get_bit(7)

    def prev(self, prev_chunk: ByteVector, n: int = 1) -> ByteVector:
        """This vector shifted up by n bytes, filled from the end of prev_chunk."""
        prev_chunk = self._coerce(prev_chunk)
        if not 0 <= n <= LANE:
            raise ValueError(f"shift must be between 0 and {LANE}")
        joined = prev_chunk._bytes + self._bytes
        return self._new(joined[self.width - n : 2 * self.width - n])

    def lookup_16(self, table: ByteVector | Sequence[int]) -> ByteVector:
        """Byte shuffle: each byte picks from its 16-byte lane of table.

        Bytes with the high bit set give zero; otherwise the low four bits
        index the table. A 16-entry table is repeated in every lane.
        """
        if isinstance(table, ByteVector):
            entries = table._bytes
        else:
            entries = bytes(table)
        if len(entries) == LANE:
            entries = entries * (self.width // LANE)
        if len(entries) != self.width:
            raise ValueError(f"table needs {LANE} or {self.width} entries")
        return self._new(
            bytes(
                0 if a & 0x80 else entries[(i // LANE) * LANE + (a & 0x0F)]
                for i, a in enumerate(self._bytes)
            )
        )