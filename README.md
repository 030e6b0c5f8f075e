# sonicnode

A small JSON toolkit built around a mutable document tree, with helpers for
scanning JSON text byte by byte and for quoting strings.

## Modules

- `sonicnode.node` — `Node` and `Member`. A `Node` is a JSON value that can
  be null, bool, signed or unsigned 64-bit integer, double, string, raw text,
  array or object, and can change type in place (`set_null`, `set_bool`,
  `set_int64`, `set_uint64`, `set_double`, `set_string`, `set_raw`,
  `set_object`, `set_array`).
  - Objects keep members in insertion order and allow duplicate keys.
    `add_member`, `find_member`, `has_member`, `remove_member` (the last
    member moves into the freed slot) and `erase_members` (order kept).
    `create_map` builds a key index used by lookups; `destroy_map` drops it.
  - Arrays support `push_back`, `pop_back`, `back`, `erase`, `reserve` and
    `clear`. Capacity starts at 16 and grows by half again when full.
  - Passing a `Node` to `push_back` or `add_member` moves it, leaving the
    argument null. `take`, `assign`, `swap` and `copy_from` move, swap or
    deep-copy whole nodes.
  - `from_python` and `to_python` convert to and from `dict`, `list`,
    `str`, `int`, `float`, `bool` and `None`. Equality compares structure;
    objects compare regardless of member order, doubles bit for bit.
- `sonicnode.quote` — `quote(data)` wraps text or bytes in double quotes,
  escaping `"`, `\` and control characters; other characters are copied.
- `sonicnode.errors` — the `SonicError` codes and their messages
  (`error_msg`), the `SonicJsonError` exception carrying a code and an
  offset, and `ParseResult` with `ok()` and `raise_for_error()`.
- `sonicnode.types` — `TypeFlag`, the node type tags, and
  `pack_type_and_length` / `unpack_type_and_length` for a 64-bit word
  holding a type and a 56-bit length.
- `sonicnode.stringview` — `StringView`, a window onto a byte buffer that
  shares it rather than copying, compared byte-wise with other views, `str`
  or `bytes`.
- `sonicnode.number_fast` — `parse_floating_normal_fast(exp10, mantissa,
  sign)` returns the IEEE-754 bits of `mantissa * 10**exp10`, or `None`
  when the result cannot be decided quickly; `bits_to_double` and
  `pow10_m128` support it.
- `sonicnode.vector` — `ByteVector`, an immutable 16- or 32-byte vector with
  lane-wise arithmetic, saturating math, comparisons returning masks,
  shifts, `to_bitmask`, `prev` and `lookup_16`.
- `sonicnode.string_block` — `StringBlock.find` reports bitmasks of
  backslashes, quotes and control bytes in a 16-byte window;
  `non_space_bits` reports the non-whitespace bytes.
- `sonicnode.utils` — `is_space` and `skip_space` for JSON whitespace.

## Example

```python
from sonicnode.node import Node
from sonicnode.quote import quote

obj = Node.from_python({"a": 1, "b": [{"a": 1}, {"b": 2}]})
print(obj["b"][1].has_member("b"))   # True

obj.create_map()
member = obj.find_member("a")
print(member.value.get_int64())      # 1
obj.destroy_map()

obj.add_member("Key", Node("Value"))
print(obj.to_python())

print(quote(b'say "hi"\n'))          # b'"say \\"hi\\"\\n"'
```

## What it does not do

The package does not parse JSON text into a `Node`, nor serialise a `Node`
back to JSON text. Build trees with `Node.from_python` or the setter and
container methods, and read them out with `to_python`; the standard
`json` module can handle the text on either side. `ParseResult` and
`SonicJsonError` are provided for callers that report such errors
themselves.

## Installing and testing

```
pip install .[test]
pytest
```