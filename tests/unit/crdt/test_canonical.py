"""Tests for the process-independent element encoding."""

from dataclasses import dataclass
from enum import Enum

from convergent.crdt.canonical import canonical, canonical_key


class Color(Enum):
    RED = "red"


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class TestCanonical:
    """Tests for canonical()."""

    def test_scalars_are_tagged_with_type(self):
        assert canonical(1) == ["int", 1]
        assert canonical("a") == ["str", "a"]
        assert canonical(None) == ["NoneType", None]
        assert canonical(True) == ["bool", True]

    def test_int_and_str_do_not_collide(self):
        assert canonical_key(1) != canonical_key("1")

    def test_frozenset_members_are_sorted(self):
        assert canonical(frozenset("cab")) == canonical(frozenset("abc"))
        assert canonical(frozenset("cab"))[1] == [["str", "a"], ["str", "b"], ["str", "c"]]

    def test_nested_containers(self):
        value = ("k", frozenset({2, 1}))
        assert canonical(value) == ["tuple", [["str", "k"], ["frozenset", [["int", 1], ["int", 2]]]]]

    def test_dict_items_are_sorted(self):
        assert canonical({"b": 1, "a": 2}) == canonical({"a": 2, "b": 1})

    def test_bytes_are_hex(self):
        assert canonical(b"\x01\xff") == ["bytes", "01ff"]

    def test_enum_uses_value(self):
        name, payload = canonical(Color.RED)
        assert name.endswith("Color")
        assert payload == ["str", "red"]

    def test_dataclass_fields_in_declaration_order(self):
        name, payload = canonical(Point(1, 2))
        assert name.endswith("Point")
        assert payload == [["x", ["int", 1]], ["y", ["int", 2]]]

    def test_mixed_types_sort_without_error(self):
        ordered = sorted([3, "a", (1,), frozenset({1})], key=canonical_key)
        assert len(ordered) == 4
        assert sorted(reversed(ordered), key=canonical_key) == ordered
