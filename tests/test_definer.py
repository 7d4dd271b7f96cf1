from typing import Any

import predefine as pd
import pytest


def test_readable_and_writable_patterns():
	obj = pd.PropertyObject()
	writable = pd.make_definer(obj, pd.WRITABLE)
	readable = pd.make_definer(obj, pd.READABLE)

	readable("foo", "bar")
	assert obj.foo == "bar"
	obj.foo = "foo"
	assert obj.foo == "bar"

	writable("bar", "bar")
	assert obj.bar == "bar"
	obj.bar = "foo"
	assert obj.bar == "foo"

	assert pd.keys(obj) == []


def test_default_pattern_is_readable():
	obj = pd.PropertyObject()
	define = pd.make_definer(obj)
	assert define.pattern is pd.READABLE
	define("foo", "bar")
	assert pd.get_own_property_descriptor(obj, "foo") == {
		"value": "bar",
		"writable": False,
		"enumerable": False,
		"configurable": False,
	}


def test_definer_chains():
	obj = pd.PropertyObject()
	define = pd.make_definer(obj, pd.WRITABLE)
	assert define("a", 1)("b", 2) is define
	assert (obj.a, obj.b) == (1, 2)


def test_redefining_same_value_does_not_raise():
	obj = pd.PropertyObject()
	readable = pd.make_definer(obj, pd.READABLE)
	readable("foo", "bar")
	readable("foo", "bar")
	assert obj.foo == "bar"


def test_redefining_different_value_propagates_error():
	obj = pd.PropertyObject()
	readable = pd.make_definer(obj)
	readable("foo", "bar")
	with pytest.raises(pd.InvalidDescriptor):
		readable("foo", "baz")


def test_partial_descriptor_overrides_pattern():
	obj = pd.PropertyObject()
	define = pd.make_definer(obj, pd.WRITABLE)
	define("shown", {"value": 1, "enumerable": True})
	assert pd.get_own_property_descriptor(obj, "shown") == {
		"value": 1,
		"writable": True,
		"enumerable": True,
		"configurable": True,
	}
	assert pd.keys(obj) == ["shown"]


def test_pattern_is_not_mutated():
	obj = pd.PropertyObject()
	pattern = pd.Pattern(configurable=True)
	define = pd.make_definer(obj, pattern)
	define("a", {"value": 1, "enumerable": True})
	assert dict(pattern) == {"configurable": True}


def test_accessor_through_pattern_conflicts_with_writable():
	obj = pd.PropertyObject()
	readable = pd.make_definer(obj)
	with pytest.raises(pd.InvalidDescriptor):
		readable("cache", {"get": lambda: None, "set": lambda value: None})


def test_bypass_defines_pure_accessor():
	obj = pd.PropertyObject()
	state = {"value": "str"}

	def read() -> str:
		return state["value"]

	def write(data: str) -> None:
		state["value"] = data

	readable = pd.make_definer(obj, pd.READABLE)
	readable("cache", {"get": read, "set": write}, True)

	assert pd.get_own_property_descriptor(obj, "cache") == {
		"get": read,
		"set": write,
		"enumerable": False,
		"configurable": False,
	}
	assert obj.cache == "str"
	obj.cache = "bar"
	assert obj.cache == "bar"
	assert state["value"] == "bar"


def test_non_descriptor_values_are_wrapped():
	obj = pd.PropertyObject()
	define = pd.make_definer(obj, pd.WRITABLE)
	payload: dict[str, Any] = {"name": "x"}
	define("payload", payload)
	define("empty", {})
	define("items", [1, 2])
	assert obj.payload is payload
	assert obj.empty == {}
	assert obj["items"] == [1, 2]


def test_definer_on_plain_dict_requires_permissive_pattern():
	target: dict[str, Any] = {}
	permissive = pd.Pattern(configurable=True, enumerable=True, writable=True)
	pd.make_definer(target, permissive)("a", 1)
	assert target == {"a": 1}
	with pytest.raises(pd.InvalidDescriptor):
		pd.make_definer(target)("b", 2)


def test_make_definer_rejects_unsupported_targets():
	with pytest.raises(TypeError):
		pd.make_definer("not an object")  # pyright: ignore[reportArgumentType]


def test_definer_constructed_directly_uses_readable_pattern():
	obj = pd.PropertyObject()
	define = pd.Definer(obj)
	assert define.pattern is pd.READABLE
	define("foo", "bar")
	assert pd.keys(obj) == []
	assert obj.foo == "bar"


def test_patterns_are_hashable():
	assert hash(pd.READABLE) == hash(pd.Pattern(enumerable=False, writable=False))
	assert len({pd.READABLE, pd.WRITABLE, pd.Pattern(enumerable=False, writable=False)}) == 2
