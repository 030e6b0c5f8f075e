"""A mutable JSON value: scalars, strings, arrays and objects with ordered members."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Iterator, Union

from .stringview import StringView
from .types import TypeFlag

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1
_DEFAULT_CAPACITY = 16

_Key = Union[str, bytes, bytearray, StringView]


def _grow(capacity: int) -> int:
    """Next capacity: a fixed start, then growth by a factor of 1.5."""
    return capacity + (capacity + 1) // 2 if capacity else _DEFAULT_CAPACITY


def _text(value: _Key) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, StringView):
        return value.decode()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    raise TypeError(f"expected a string, not {type(value).__name__}")


def _double_bits(value: float) -> bytes:
    return struct.pack("<d", value)


@dataclass(eq=False)
class Member:
    """One name/value pair of an object node."""

    name: Node
    value: Node


class Node:
    """A JSON value whose type can change in place.

    Strings keep a sub-type telling whether they were copied (STRING_FREE),
    belong to a document buffer (STRING_COPY) or refer to caller data
    (STRING_CONST). Containers track a capacity that grows by half again
    each time it runs out. Objects keep members in insertion order and may
    hold a key index built by ``create_map``.
    """

    __slots__ = ("_type", "_value", "_items", "_capacity", "_map")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Any = None) -> None:
        self._reset()
        if isinstance(value, TypeFlag):
            self._init_flag(value)
        elif value is None:
            pass
        elif isinstance(value, bool):
            self.set_bool(value)
        elif isinstance(value, int):
            self._set_int(value)
        elif isinstance(value, float):
            self.set_double(value)
        elif isinstance(value, (str, bytes, bytearray, StringView)):
            self.set_string(value)
        else:
            raise TypeError(f"cannot make a node from {type(value).__name__}")

    # internal state

    def _reset(self) -> None:
        self._type = TypeFlag.NULL
        self._value: Any = None
        self._items: list | None = None
        self._capacity = 0
        self._map: dict[str, list[int]] | None = None

    def _state(self) -> tuple:
        return (self._type, self._value, self._items, self._capacity, self._map)

    def _load(self, state: tuple) -> None:
        self._type, self._value, self._items, self._capacity, self._map = state

    def _init_flag(self, flag: TypeFlag) -> None:
        if flag is TypeFlag.NULL:
            return
        if flag is TypeFlag.OBJECT:
            self.set_object()
        elif flag is TypeFlag.ARRAY:
            self.set_array()
        elif flag is TypeFlag.TRUE:
            self.set_bool(True)
        elif flag is TypeFlag.FALSE:
            self.set_bool(False)
        else:
            raise ValueError(f"cannot make an empty node of type {flag.name}")

    def _set_int(self, value: int) -> Node:
        if value < 0:
            if value < _INT64_MIN:
                raise ValueError(f"{value} does not fit in a signed 64-bit integer")
            flag = TypeFlag.SINT
        else:
            if value > _UINT64_MAX:
                raise ValueError(f"{value} does not fit in an unsigned 64-bit integer")
            flag = TypeFlag.UINT
        self._reset()
        self._type = flag
        self._value = value
        return self

    def _require(self, ok: bool, what: str) -> None:
        if not ok:
            raise TypeError(f"node is {self._type.name}, not {what}")

    @staticmethod
    def _adopt(value: Any) -> Node:
        """Move a node's content out of it, or build one from a Python value."""
        if isinstance(value, Node):
            return value.take()
        return Node.from_python(value)

    @staticmethod
    def _copied(src: Node, copy_string: bool) -> Node:
        node = Node()
        flag = src._type
        if flag is TypeFlag.OBJECT:
            node._type = flag
            node._items = [
                Member(Node._copied(m.name, copy_string), Node._copied(m.value, copy_string))
                for m in src._items
            ]
            node._capacity = len(node._items)
        elif flag is TypeFlag.ARRAY:
            node._type = flag
            node._items = [Node._copied(child, copy_string) for child in src._items]
            node._capacity = len(node._items)
        elif flag.is_string_kind():
            keep_const = flag is TypeFlag.STRING_CONST and not copy_string
            node._type = TypeFlag.STRING_CONST if keep_const else TypeFlag.STRING_FREE
            node._value = src._value
        else:
            node._type = flag
            node._value = src._value
        return node

    # conversion

    @classmethod
    def from_python(cls, value: Any) -> Node:
        """Build a tree from None, bool, int, float, str, list/tuple and dict."""
        if isinstance(value, Node):
            raise TypeError("use copy_from or take to copy or move a node")
        if isinstance(value, dict):
            node = cls().set_object()
            for key, child in value.items():
                node.add_member(key, cls.from_python(child))
            return node
        if isinstance(value, (list, tuple)):
            node = cls().set_array()
            for child in value:
                node.push_back(cls.from_python(child))
            return node
        node = cls(value)
        if node._type is TypeFlag.STRING_CONST:
            node._type = TypeFlag.STRING_COPY
        return node

    def to_python(self) -> Any:
        """Plain Python value: dict, list, str, int, float, bool or None."""
        if self._type is TypeFlag.OBJECT:
            return {m.name._value: m.value.to_python() for m in self._items}
        if self._type is TypeFlag.ARRAY:
            return [child.to_python() for child in self._items]
        return self._value

    # type checks

    def is_null(self) -> bool:
        return self._type is TypeFlag.NULL

    def is_bool(self) -> bool:
        return self._type.basic() is TypeFlag.BOOL

    def is_true(self) -> bool:
        return self._type is TypeFlag.TRUE

    def is_false(self) -> bool:
        return self._type is TypeFlag.FALSE

    def is_number(self) -> bool:
        return self._type.is_number_kind()

    def is_int64(self) -> bool:
        if self._type is TypeFlag.SINT:
            return True
        return self._type is TypeFlag.UINT and self._value <= _INT64_MAX

    def is_uint64(self) -> bool:
        return self._type is TypeFlag.UINT

    def is_double(self) -> bool:
        return self._type is TypeFlag.REAL

    def is_string(self) -> bool:
        return self._type.is_string_kind()

    def is_string_const(self) -> bool:
        return self._type is TypeFlag.STRING_CONST

    def is_raw(self) -> bool:
        return self._type is TypeFlag.RAW

    def is_array(self) -> bool:
        return self._type is TypeFlag.ARRAY

    def is_object(self) -> bool:
        return self._type is TypeFlag.OBJECT

    def is_container(self) -> bool:
        return self._type.is_container()

    # getters

    def get_bool(self) -> bool:
        self._require(self.is_bool(), "a bool")
        return self._type is TypeFlag.TRUE

    def get_int64(self) -> int:
        self._require(self._type in (TypeFlag.SINT, TypeFlag.UINT), "an integer")
        if self._value > _INT64_MAX:
            raise OverflowError(f"{self._value} does not fit in a signed 64-bit integer")
        return self._value

    def get_uint64(self) -> int:
        self._require(self._type in (TypeFlag.SINT, TypeFlag.UINT), "an integer")
        if self._value < 0:
            raise OverflowError(f"{self._value} is negative")
        return self._value

    def get_double(self) -> float:
        self._require(self.is_double(), "a double")
        return self._value

    def get_string(self) -> str:
        self._require(self.is_string(), "a string")
        return self._value

    # setters

    def set_null(self) -> Node:
        self._reset()
        return self

    def set_bool(self, value: bool) -> Node:
        self._reset()
        self._type = TypeFlag.TRUE if value else TypeFlag.FALSE
        self._value = bool(value)
        return self

    def set_int64(self, value: int) -> Node:
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer")
        return self._set_int(value)

    def set_uint64(self, value: int) -> Node:
        if not 0 <= value <= _UINT64_MAX:
            raise ValueError(f"{value} does not fit in an unsigned 64-bit integer")
        return self._set_int(value)

    def set_double(self, value: float) -> Node:
        self._reset()
        self._type = TypeFlag.REAL
        self._value = float(value)
        return self

    def set_string(self, value: _Key, copy: bool = False) -> Node:
        """Make this a string; copy=True marks it as owning its own copy."""
        text = _text(value)
        self._reset()
        self._type = TypeFlag.STRING_FREE if copy else TypeFlag.STRING_CONST
        self._value = text
        return self

    def set_raw(self, text: _Key) -> Node:
        """Make this a raw JSON fragment kept as text."""
        raw = _text(text)
        self._reset()
        self._type = TypeFlag.RAW
        self._value = raw
        return self

    def set_object(self) -> Node:
        self._reset()
        self._type = TypeFlag.OBJECT
        self._items = []
        return self

    def set_array(self) -> Node:
        self._reset()
        self._type = TypeFlag.ARRAY
        self._items = []
        return self

    # sizes

    def size(self) -> int:
        """Element count for containers, UTF-8 byte length for strings and raw text."""
        if self.is_container():
            return len(self._items)
        if self.is_string() or self.is_raw():
            return len(self._value.encode("utf-8"))
        return 0

    def capacity(self) -> int:
        return self._capacity if self.is_container() else 0

    def empty(self) -> bool:
        return self.size() == 0

    def clear(self) -> Node:
        """Remove every element of a container and release its storage."""
        self._require(self.is_container(), "a container")
        self._items = []
        self._capacity = 0
        self._map = None
        return self

    def reserve(self, capacity: int) -> Node:
        self._require(self.is_container(), "a container")
        if capacity > self._capacity:
            self._capacity = capacity
        return self

    # array operations

    def push_back(self, value: Any) -> Node:
        """Append a value; a Node argument is moved and left null."""
        self._require(self.is_array(), "an array")
        if len(self._items) >= self._capacity:
            self._capacity = _grow(self._capacity)
        self._items.append(self._adopt(value))
        return self

    def pop_back(self) -> Node:
        self._require(self.is_array(), "an array")
        if not self._items:
            raise IndexError("pop from an empty array")
        self._items.pop()
        return self

    def back(self) -> Node:
        self._require(self.is_array(), "an array")
        if not self._items:
            raise IndexError("empty array has no last element")
        return self._items[-1]

    def erase(self, start: int, end: int | None = None) -> int:
        """Remove elements start..end (default one element); return start."""
        self._require(self.is_array(), "an array")
        if end is None:
            end = start + 1
        if not 0 <= start <= end <= len(self._items):
            raise IndexError("erase range outside the array")
        del self._items[start:end]
        return start

    # object operations

    def members(self) -> Iterator[Member]:
        self._require(self.is_object(), "an object")
        return iter(self._items)

    def add_member(self, key: _Key, value: Any, copy_key: bool = True) -> Member:
        """Append a member; a Node value is moved and left null. Duplicate keys are kept."""
        self._require(self.is_object(), "an object")
        if len(self._items) >= self._capacity:
            self._capacity = _grow(self._capacity)
        name = Node().set_string(key, copy=copy_key)
        member = Member(name, self._adopt(value))
        self._items.append(member)
        if self._map is not None:
            self._map.setdefault(name._value, []).append(len(self._items) - 1)
        return member

    def _index_of(self, key: str) -> int | None:
        if self._map is not None:
            slots = self._map.get(key)
            return slots[0] if slots else None
        return next(
            (
                index
                for index, member in enumerate(self._items)
                if member.name.is_string() and member.name._value == key
            ),
            None,
        )

    def find_member(self, key: _Key) -> Member | None:
        """The first member with this key, or None."""
        self._require(self.is_object(), "an object")
        index = self._index_of(_text(key))
        return None if index is None else self._items[index]

    def has_member(self, key: _Key) -> bool:
        return self.find_member(key) is not None

    def remove_member(self, key: _Key) -> bool:
        """Remove the first member with this key; the last member takes its place."""
        self._require(self.is_object(), "an object")
        name = _text(key)
        index = self._index_of(name)
        if index is None:
            return False
        if self._map is not None:
            slots = self._map[name]
            slots.remove(index)
            if not slots:
                del self._map[name]
        last = len(self._items) - 1
        if index != last:
            tail = self._items[last]
            self._items[index] = tail
            if self._map is not None:
                slots = self._map[tail.name._value]
                slots.remove(last)
                slots.append(index)
        self._items.pop()
        return True

    def erase_members(self, first: int, last: int | None = None) -> int:
        """Remove members first..last (default one), keeping order; drops the key index."""
        self._require(self.is_object(), "an object")
        self.destroy_map()
        size = len(self._items)
        if last is None:
            last = first + 1
        if not 0 <= first <= last <= size:
            raise IndexError("erase range outside the object")
        if last - first >= size:
            self._items = []
            self._capacity = 0
            return 0
        del self._items[first:last]
        return first

    def create_map(self) -> bool:
        """Build a key index for faster lookups; nothing happens if one exists."""
        self._require(self.is_object(), "an object")
        if self._capacity == 0:
            self._capacity = _DEFAULT_CAPACITY
        if self._map is not None:
            return True
        index: dict[str, list[int]] = {}
        for position, member in enumerate(self._items):
            index.setdefault(member.name._value, []).append(position)
        self._map = index
        return True

    def destroy_map(self) -> None:
        self._require(self.is_object(), "an object")
        self._map = None

    def has_map(self) -> bool:
        return self.is_object() and self._map is not None

    # whole-node operations

    def copy_from(self, other: Node, copy_string: bool = False) -> Node:
        """Deep-copy other into this node.

        Strings that refer to caller data stay that way unless copy_string is
        true; every other string becomes an owned copy.
        """
        self._load(Node._copied(other, copy_string)._state())
        return self

    def take(self) -> Node:
        """Move this node's content into a new node and leave this one null."""
        moved = Node()
        moved._load(self._state())
        self._reset()
        return moved

    def assign(self, other: Node) -> Node:
        """Move other's content into this node and leave other null."""
        if other is not self:
            state = other._state()
            other._reset()
            self._load(state)
        return self

    def swap(self, other: Node) -> Node:
        state = self._state()
        self._load(other._state())
        other._load(state)
        return self

    # Python protocols

    def __getitem__(self, key: int | _Key) -> Node:
        """Array element by index, or object value by key (a new null node if absent)."""
        if isinstance(key, int) and not isinstance(key, bool):
            self._require(self.is_array(), "an array")
            return self._items[key]
        if isinstance(key, (str, bytes, bytearray, StringView)):
            member = self.find_member(key)
            return member.value if member is not None else Node()
        raise TypeError(f"invalid key type {type(key).__name__}")

    def __iter__(self) -> Iterator:
        self._require(self.is_container(), "a container")
        return iter(self._items)

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        basic = self._type.basic()
        if basic is not other._type.basic():
            return False
        if basic is TypeFlag.OBJECT:
            if len(self._items) != len(other._items):
                return False
            for member in self._items:
                found = other.find_member(member.name._value) if member.name.is_string() else None
                if found is None or member.value != found.value:
                    return False
            return True
        if basic is TypeFlag.ARRAY:
            return len(self._items) == len(other._items) and all(
                a == b for a, b in zip(self._items, other._items)
            )
        if basic in (TypeFlag.STRING, TypeFlag.RAW):
            return self._value == other._value
        if basic is TypeFlag.NUMBER:
            if self._type is not other._type:
                return False
            if self._type is TypeFlag.REAL:
                return _double_bits(self._value) == _double_bits(other._value)
            return self._value == other._value
        return self._type is other._type

    def __repr__(self) -> str:
        return f"Node({self.to_python()!r})"