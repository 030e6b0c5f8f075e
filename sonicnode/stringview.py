"""A read-only window onto a byte buffer."""

from __future__ import annotations

from functools import total_ordering
from typing import Union

_Buffer = Union[bytes, bytearray, memoryview]


def _as_bytes(other: object) -> bytes | None:
    if isinstance(other, StringView):
        return bytes(other)
    if isinstance(other, str):
        return other.encode("utf-8")
    if isinstance(other, (bytes, bytearray, memoryview)):
        return bytes(other)
    return None


@total_ordering
class StringView:
    """A slice of a buffer that shares the buffer instead of copying it."""

    __slots__ = ("_data", "_start", "_length")

    def __init__(
        self,
        data: _Buffer | str | StringView | None = None,
        start: int = 0,
        length: int | None = None,
    ) -> None:
        if data is None:
            if start or length:
                raise ValueError("an empty view has no start or length")
            self._data: _Buffer | None = None
            self._start = 0
            self._length = 0
            return
        if isinstance(data, StringView):
            base, offset, available = data._data, data._start, data._length
        else:
            base = data.encode("utf-8") if isinstance(data, str) else data
            offset, available = 0, len(base)
        if length is None:
            length = available - start
        if start < 0 or length < 0 or start + length > available:
            raise ValueError("view does not fit inside its buffer")
        self._data = base
        self._start = offset + start
        self._length = length

    def data(self) -> _Buffer | None:
        """The underlying buffer (None for a default view)."""
        return self._data

    @property
    def start(self) -> int:
        """Offset of the view inside its buffer."""
        return self._start

    def size(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def __bytes__(self) -> bytes:
        if self._data is None:
            return b""
        return bytes(self._data[self._start : self._start + self._length])

    def decode(self, encoding: str = "utf-8") -> str:
        return bytes(self).decode(encoding)

    def __eq__(self, other: object) -> bool:
        rhs = _as_bytes(other)
        if rhs is None:
            return NotImplemented
        return bytes(self) == rhs

    def __lt__(self, other: object) -> bool:
        rhs = _as_bytes(other)
        if rhs is None:
            return NotImplemented
        return bytes(self) < rhs

    def __hash__(self) -> int:
        return hash(bytes(self))

    def __repr__(self) -> str:
        return f"StringView({bytes(self)!r})"