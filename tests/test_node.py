import pytest
from hypothesis import given
from hypothesis import strategies as st

from sonicnode.node import Member, Node
from sonicnode.types import TypeFlag

DATA = {
    "id": 12125925,
    "ids": [-2147483648, 2147483647],
    "title": "未来简史",
    "titles": ["", "world"],
    "price": 345.67,
    "prices": [-0.1, 0.1],
    "hot": True,
    "hots": [True, True, True],
    "author": {"name": "json", "age": 99, "male": True},
    "authors": [{"name": None, "age": 99, "male": True}, [], [[]]],
    "weights": [],
    "extra": {},
    "other": None,
}


@pytest.fixture
def doc():
    return Node.from_python(DATA)


def _keys(node):
    return [m.name.get_string() for m in node.members()]


def test_constructor_negative_int():
    node = Node(-1)
    assert node.is_int64()
    assert node.is_number()
    assert not node.is_uint64()
    assert not node.is_double()
    assert not node.is_container()
    assert node.get_int64() == -1


def test_constructor_unsigned_int():
    node = Node(1)
    assert node.is_uint64()
    assert node.is_number()
    assert node.get_uint64() == 1


def test_constructor_double():
    node = Node(1.0)
    assert node.is_double()
    assert node.is_number()
    assert not node.is_int64()
    assert not node.is_uint64()
    assert not node.is_string()
    assert node.get_double() == 1.0


def test_constructor_string():
    node = Node("Hello world!")
    assert node.is_string()
    assert not node.is_number()
    assert not node.is_container()
    assert node.get_string() == "Hello world!"
    assert node.size() == 12
    assert node.is_string_const()


def test_string_size_is_utf8_bytes():
    assert Node("景").size() == 3


def test_constructor_from_flag():
    assert Node(TypeFlag.ARRAY).is_array()
    assert Node(TypeFlag.OBJECT).is_object()
    assert Node(TypeFlag.NULL).is_null()
    with pytest.raises(ValueError):
        Node(TypeFlag.REAL)


def test_integer_out_of_range():
    with pytest.raises(ValueError):
        Node(1 << 64)
    with pytest.raises(ValueError):
        Node(-(1 << 63) - 1)
    with pytest.raises(ValueError):
        Node().set_int64(1 << 63)


def test_large_uint_not_int64():
    node = Node((1 << 64) - 1)
    assert node.is_uint64()
    assert not node.is_int64()
    with pytest.raises(OverflowError):
        node.get_int64()


def test_root_object(doc):
    assert doc.size() == 13
    assert doc.is_object()
    assert doc.is_container()
    assert not doc.empty()
    ids = doc["ids"]
    assert ids.is_array()
    assert ids[0].get_int64() == -2147483648
    assert ids[1].get_uint64() == 2147483647
    assert ids.size() == 2
    author = doc.find_member("author")
    assert author is not None
    assert author.name.get_string() == "author"


def test_check_type(doc):
    assert doc["other"].is_null()
    assert doc["title"].is_string()
    assert doc["id"].is_int64()
    assert doc["id"].is_uint64()
    assert doc["ids"].is_array()
    assert doc["author"]["male"].is_true()
    assert doc["authors"][2][0].is_array()


def test_get(doc):
    assert doc["id"].get_uint64() == 12125925
    assert doc["price"].get_double() == pytest.approx(345.67)
    assert doc["prices"][0].get_double() == pytest.approx(-0.1)
    assert doc["hots"][2].get_bool() is True
    assert doc["title"].get_string() == "未来简史"
    assert doc.has_member("other")
    assert not doc.has_member("unknown name")
    assert doc.find_member("extra").value.is_object()


def test_length(doc):
    assert doc["authors"].size() == 3
    assert doc["weights"].empty()
    assert doc["titles"][0].empty()


def test_missing_key_gives_null(doc):
    assert doc["unknown"].is_null()
    assert doc.size() == 13


def test_getter_type_errors(doc):
    with pytest.raises(TypeError):
        doc["title"].get_int64()
    with pytest.raises(TypeError):
        doc["id"].get_double()
    with pytest.raises(IndexError):
        doc["ids"][5]


def test_round_trip(doc):
    assert doc.to_python() == DATA


def test_swap(doc):
    other = Node()
    other.swap(doc)
    assert other.is_object()
    assert doc.is_null()


def test_iterator_erase(doc):
    arr = doc["ids"]
    arr.clear()
    for i in range(10):
        arr.push_back(Node(i) if i % 2 == 0 else Node(TypeFlag.NULL))
    for index in reversed(range(arr.size())):
        if arr[index] == Node():
            arr.erase(index)
    assert arr.size() == 5
    assert [n.get_int64() for n in arr] == [0, 2, 4, 6, 8]


def test_node_copy_control(doc):
    snode = Node().set_string("new allocated", copy=True)
    doc["title"].assign(snode)
    assert snode.is_null()
    assert doc["title"].get_string() == "new allocated"
    assert not doc["title"].is_string_const()

    doc["titles"].push_back(Node().set_string("dynamic", copy=True))
    dyn = doc["titles"][-1]
    assert not dyn.is_string_const()
    dyn.assign(Node().set_string("new allocated in sub-node", copy=True))
    assert doc["titles"][-1].get_string() == "new allocated in sub-node"

    doc["titles"].assign(doc["titles"].back())
    assert not doc["titles"].is_string_const()
    assert doc["titles"].get_string() == "new allocated in sub-node"

    moved = doc["titles"].take()
    assert moved.get_string() == "new allocated in sub-node"
    assert doc["titles"].is_null()

    swapped = Node()
    swapped.swap(moved)
    assert not swapped.is_string_const()
    assert moved.is_null()


def test_push_back_moves_value():
    arr = Node(TypeFlag.ARRAY)
    value = Node(5)
    arr.push_back(value)
    assert value.is_null()
    assert arr[0].get_int64() == 5


@pytest.mark.parametrize("which", ["dynamic", "static"])
def test_array_push_pop(doc, which):
    if which == "dynamic":
        doc["weights"].push_back(Node(TypeFlag.ARRAY))
        arr = doc["weights"][0]
    else:
        arr = doc["authors"]
    if not arr.empty():
        arr.erase(0, arr.size())
    for _ in range(10):
        arr.push_back(Node(1))
        arr.pop_back()
    assert arr.empty()
    for _ in range(10):
        arr.push_back(Node(1))
    for _ in range(10):
        arr.pop_back()
    assert arr.empty()
    for _ in range(10):
        arr.push_back(Node(1))
    for _ in range(10):
        arr.erase(0)
    assert arr.empty()
    for _ in range(10):
        arr.push_back(Node(1))
    for i in range(9, -1, -1):
        arr.erase(i // 2)
    assert arr.empty()
    for _ in range(10):
        arr.push_back(Node(1))
    arr.clear()
    assert arr.empty()


def test_pop_back_empty_raises():
    with pytest.raises(IndexError):
        Node(TypeFlag.ARRAY).pop_back()
    with pytest.raises(IndexError):
        Node(TypeFlag.ARRAY).back()


@pytest.mark.parametrize("which", ["dynamic", "static"])
def test_obj_add_remove(doc, which):
    if which == "dynamic":
        doc["weights"].push_back(Node(TypeFlag.OBJECT))
        obj = doc["weights"][0]
    else:
        obj = doc["author"]
    if not obj.empty():
        obj.clear()
    assert obj.empty()
    for i in range(10):
        key = f"new key{i}"
        obj.add_member(key, Node(i))
        obj.remove_member(key)
    assert obj.empty()

    for i in range(10):
        key = f"new key{i}"
        obj.add_member(key, Node(i))
        assert obj[key].get_int64() == i
        assert obj.to_python() == {f"new key{j}": j for j in range(i + 1)}

    for i in range(10):
        key = f"new key{i}"
        assert obj.find_member(key) is not None
        assert obj.remove_member(key)
        assert obj.find_member(key) is None
    assert obj.to_python() == {}

    for i in range(10):
        obj.add_member(f"new key{i}", Node(i))
    obj.clear()
    assert obj.to_python() == {}


def test_remove_member_moves_tail():
    obj = Node.from_python({"a": 1, "b": 2, "c": 3})
    assert obj.remove_member("a")
    assert _keys(obj) == ["c", "b"]
    assert not obj.remove_member("zzz")


def test_duplicate_keys_find_first():
    obj = Node(TypeFlag.OBJECT)
    obj.add_member("k", Node(1))
    obj.add_member("k", Node(2))
    assert obj.size() == 2
    assert obj["k"].get_int64() == 1
    obj.create_map()
    assert obj["k"].get_int64() == 1


def test_map_lookup_and_removal():
    obj = Node.from_python({"b": 1, "c": 2, "d": 3, "e": 4})
    assert obj.find_member("x") is None
    assert obj.create_map()
    assert obj.has_map()
    assert obj.find_member("x") is None
    assert obj["e"].get_int64() == 4
    obj.add_member("f", Node(5))
    assert obj["f"].get_int64() == 5
    assert obj.remove_member("b")
    assert _keys(obj) == ["f", "c", "d", "e"]
    assert obj["f"].get_int64() == 5
    assert obj.find_member("b") is None
    assert obj.remove_member("f")
    assert obj["e"].get_int64() == 4
    obj.destroy_map()
    assert not obj.has_map()
    assert obj["d"].get_int64() == 3


def test_create_map_on_empty_object_reserves():
    obj = Node(TypeFlag.OBJECT)
    assert obj.capacity() == 0
    obj.create_map()
    assert obj.capacity() == 16


def test_create_map_requires_object():
    with pytest.raises(TypeError):
        Node(TypeFlag.ARRAY).create_map()


def test_erase_members():
    obj = Node.from_python({"a": 1, "b": 2, "c": 3, "d": 4})
    obj.create_map()
    assert obj.erase_members(1, 3) == 1
    assert not obj.has_map()
    assert _keys(obj) == ["a", "d"]
    assert obj.erase_members(0, 2) == 0
    assert obj.empty()
    assert obj.capacity() == 0
    with pytest.raises(IndexError):
        obj.erase_members(0, 1)


def test_capacity_growth():
    arr = Node(TypeFlag.ARRAY)
    assert arr.capacity() == 0
    arr.push_back(Node(1))
    assert arr.capacity() == 16
    for i in range(16):
        arr.push_back(Node(i))
    assert arr.capacity() == 24
    arr.reserve(100)
    assert arr.capacity() == 100
    arr.reserve(10)
    assert arr.capacity() == 100
    arr.clear()
    assert arr.capacity() == 0


@pytest.mark.parametrize("which", ["dynamic", "static"])
def test_copy_from(doc, which):
    if which == "dynamic":
        doc["weights"].push_back(Node(TypeFlag.OBJECT))
        node = doc["weights"][0]
    else:
        node = doc["author"]
    rhs = Node(1.23)
    node.copy_from(rhs)
    assert node == rhs

    rhs.set_string("Hello")
    node.copy_from(rhs)
    assert node == rhs
    assert node.is_string_const()

    rhs.set_string("Hello")
    node.copy_from(rhs, True)
    assert node == rhs
    assert node.get_string() == "Hello"
    assert not node.is_string_const()

    rhs.set_string("Hello", copy=True)
    node.copy_from(rhs)
    assert node == rhs
    assert not node.is_string_const()

    rhs.set_array().push_back(Node(1))
    rhs.push_back(Node(2))
    node.copy_from(rhs)
    assert node == rhs
    assert node.capacity() == 2

    rhs.set_object()
    rhs.add_member("key1", Node("string"), False)
    rhs.add_member("key2", Node(1.23), False)
    rhs.add_member("key3", Node(True), False)
    node.copy_from(rhs)
    assert node == rhs
    assert node.to_python() == {"key1": "string", "key2": 1.23, "key3": True}


def test_copy_is_independent(doc):
    copy = Node().copy_from(doc)
    doc["ids"].push_back(Node(7))
    assert copy["ids"].size() == 2
    assert copy != doc


def test_equality_rules():
    assert Node(1) != Node(1.0)
    assert Node(0.0) != Node(-0.0)
    assert Node(True) != Node(False)
    assert Node("a") == Node().set_string("a", copy=True)
    assert Node.from_python({"a": 1, "b": 2}) == Node.from_python({"b": 2, "a": 1})
    assert Node.from_python([1, 2]) != Node.from_python([2, 1])
    assert Node().set_raw("[1]") == Node().set_raw("[1]")


def test_member_structure():
    obj = Node(TypeFlag.OBJECT)
    member = obj.add_member("k", Node("v"))
    assert isinstance(member, Member)
    assert member.name.get_string() == "k"
    assert member.value.get_string() == "v"
    assert not member.name.is_string_const()
    other = obj.add_member("j", Node(1), copy_key=False)
    assert other.name.is_string_const()


def test_len_and_iter(doc):
    assert len(doc["hots"]) == 3
    assert [n.get_bool() for n in doc["hots"]] == [True, True, True]
    with pytest.raises(TypeError):
        iter(doc["id"])


_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(1 << 63), max_value=(1 << 64) - 1)
    | st.floats(allow_nan=False)
    | st.text()
)
_json = st.recursive(
    _scalars,
    lambda children: st.lists(children, max_size=5)
    | st.dictionaries(st.text(), children, max_size=5),
    max_leaves=20,
)


@given(_json)
def test_round_trip_property(value):
    assert Node.from_python(value).to_python() == value


@given(_json)
def test_copy_equals_original(value):
    original = Node.from_python(value)
    assert Node().copy_from(original) == original