"""Object, Key and leaf node behaviour."""

import math

import pytest

from cljson import (
    Array,
    Boolean,
    ElementTypeError,
    Key,
    MissingElementError,
    Null,
    Number,
    Object,
    OutOfRangeError,
    ParseException,
    String,
    parse,
)


# ---------------------------------------------------------------------------
# Object / Key
# ---------------------------------------------------------------------------

def test_empty_object():
    assert parse("{}").to_json() == "{}"

def test_object_members():
    assert parse("{a: 1, 'b': 'x'}").to_json() == "{ \"a\": 1, \"b\": 'x' }"

def test_object_accepts_only_keys():
    root = Object.allocate("{}")
    with pytest.raises(ElementTypeError):
        root.add(Array.allocate("{}"))

def test_key_holds_one_value():
    key = Key.allocate("ab")
    key.name = "a"
    key.add(Number.allocate("ab"))
    with pytest.raises(ParseException):
        key.add(Number.allocate("ab"))

def test_key_without_value():
    key = Key.allocate("a")
    key.name = "a"
    assert key.value is None
    assert key.to_json() == '"a": <>'

def test_key_value_is_not_named():
    root = parse("{points: [1, 2, 3]}")
    key = root.get(0)
    assert isinstance(key, Key)
    assert key.name == "points"
    assert key.value.name is None
    assert key.to_json() == '"points": [1, 2, 3]'


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

SOURCE = """{
  name: 'box',
  width: 120,
  ratio: 0.5,
  visible: true,
  tag: null,
  points: [1, 2, 'three', [4]],
  margins: { start: 8 }
}"""


@pytest.fixture
def root() -> Object:
    return parse(SOURCE)


def test_names_in_declaration_order(root):
    assert root.names() == ["name", "width", "ratio", "visible", "tag", "points", "margins"]

def test_has(root):
    assert root.has("width")
    assert not root.has("height")

def test_lookup(root):
    assert isinstance(root.lookup("tag"), Null)
    assert root.lookup_or_none("height") is None

def test_lookup_missing_raises(root):
    with pytest.raises(MissingElementError):
        root.lookup("height")

def test_typed_accessors_by_name(root):
    assert root.get_string("name") == "box"
    assert root.get_int("width") == 120
    assert root.get_float("ratio") == 0.5
    assert root.get_boolean("visible") is True
    assert root.get_object("margins").get_int("start") == 8
    assert root.get_array("points").size() == 4

def test_typed_accessors_by_index(root):
    points = root.get_array("points")
    assert points.get_int(0) == 1
    assert points.get_float(1) == 2.0
    assert points.get_string(2) == "three"
    assert points.get_array(3).get_int(0) == 4

def test_index_access_unwraps_keys(root):
    assert root.get_string(0) == "box"
    assert root.get_array(5) is root.get_array("points")

def test_wrong_kind_raises(root):
    with pytest.raises(ElementTypeError):
        root.get_string("width")
    with pytest.raises(ElementTypeError):
        root.get_array("margins")
    with pytest.raises(TypeError):
        root.get_boolean("name")

def test_index_out_of_range_raises(root):
    with pytest.raises(OutOfRangeError):
        root.get_array("points").get_int(4)

def test_lenient_accessors(root):
    assert root.get_string_or_none("width") is None
    assert root.get_string_or_none("height") is None
    assert root.get_array_or_none("name") is None
    assert root.get_object_or_none("margins") is root.get_object("margins")
    assert root.get_float_or_nan("width") == 120.0
    assert math.isnan(root.get_float_or_nan("height"))


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

def leaf(cls, text):
    element = cls.allocate(text)
    element.set_span(0, len(text))
    return element


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3", "3"),
        ("-3", "-3"),
        ("2.0", "2"),
        ("1.50", "1.5"),
        (".5", "0.5"),
        ("1e3", "1000"),
        ("+7", "7"),
    ],
)
def test_number_to_json(text, expected):
    assert leaf(Number, text).to_json() == expected

def test_number_values():
    element = leaf(Number, "12.75")
    assert element.value == 12.75
    assert element.int_value == 12
    assert not element.is_int()
    assert leaf(Number, "4").is_int()

@pytest.mark.parametrize("text", ["1e999", "-1e999", "nan"])
def test_non_finite_number_is_rejected(text):
    element = leaf(Number, text)
    with pytest.raises(ElementTypeError):
        element.value
    with pytest.raises(ElementTypeError):
        element.int_value
    with pytest.raises(ElementTypeError):
        element.to_json()

def test_non_finite_number_through_accessor():
    text = "1e999"
    key = Key.allocate(text)
    key.name = "a"
    key.add(leaf(Number, text))
    root = Object.allocate(text)
    root.add(key)
    with pytest.raises(ElementTypeError, match="out of range"):
        root.get_int("a")

def test_allocate_returns_the_calling_kind():
    for cls in (Array, Object, Key, String, Number, Boolean, Null):
        element = cls.allocate("x")
        assert type(element) is cls
        assert element.buffer == "x"
        assert not element.is_started()

def test_string_keeps_raw_content():
    element = leaf(String, r"a\'b")
    assert element.value == r"a\'b"
    assert element.to_json() == r"'a\'b'"

def test_boolean_and_null():
    assert leaf(Boolean, "true").value is True
    assert leaf(Boolean, "false").value is False
    assert leaf(Boolean, "false").to_json() == "false"
    assert leaf(Null, "null").value is None
    assert leaf(Null, "null").to_json() == "null"
