"""
Object model with per-property flags.

A PropertyObject stores each named property as a slot: either a DataProperty
(a stored value plus a writable flag) or an AccessorProperty (get/set
functions). Both carry enumerable and configurable flags. The module-level
functions implement define/read/write/delete on PropertyObjects and on plain
mappings, which behave like objects whose every key is a writable, enumerable,
configurable data property.

Accessor functions are called without the owning object: getters with no
arguments, setters with the assigned value.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, replace
from typing import Any, Final, TypeAlias, TypeVar, final, override

from predefine.config import get_config
from predefine.descriptor import DESCRIPTOR_KEYS
from predefine.errors import InvalidDescriptor, PropertyWriteError

logger = logging.getLogger(__name__)

Getter: TypeAlias = Callable[[], Any]
Setter: TypeAlias = Callable[[Any], Any]
Composite: TypeAlias = "PropertyObject | Mapping[str, Any]"

T = TypeVar("T")

_FLAGS: Final = ("configurable", "enumerable", "writable")


class Sentinel:
	def __init__(self, name: str) -> None:
		self.name = name

	@override
	def __repr__(self) -> str:
		return self.name


MISSING: Final = Sentinel("MISSING")


@dataclass(frozen=True, slots=True)
class DataProperty:
	value: Any = None
	writable: bool = False
	enumerable: bool = False
	configurable: bool = False

	def to_descriptor(self) -> dict[str, Any]:
		return {
			"value": self.value,
			"writable": self.writable,
			"enumerable": self.enumerable,
			"configurable": self.configurable,
		}


@dataclass(frozen=True, slots=True)
class AccessorProperty:
	get: Getter | None = None
	set: Setter | None = None
	enumerable: bool = False
	configurable: bool = False

	def to_descriptor(self) -> dict[str, Any]:
		return {
			"get": self.get,
			"set": self.set,
			"enumerable": self.enumerable,
			"configurable": self.configurable,
		}


Slot: TypeAlias = DataProperty | AccessorProperty


@final
class PropertyObject:
	"""
	An object whose properties carry descriptor flags.

	Properties are reachable both as attributes and as items. Plain assignment
	to a missing name creates a writable, enumerable, configurable property;
	assignment to a read-only one is ignored (or raises PropertyWriteError when
	the `strict` option is configured).

	Example:

	```python
	obj = PropertyObject(name="demo")
	define_property(obj, "id", {"value": 7})
	obj.id = 8  # ignored, "id" is not writable
	list(obj)  # ["name"], "id" is not enumerable
	```
	"""

	__slots__: Final = ("_slots",)
	_slots: dict[str, Slot]

	def __init__(self, values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
		object.__setattr__(self, "_slots", {})
		for source in (values or {}, kwargs):
			for name, value in source.items():
				self._slots[name] = DataProperty(value, True, True, True)

	def __getattr__(self, name: str) -> Any:
		if name == "_slots" or (name.startswith("__") and name.endswith("__")):
			raise AttributeError(name)
		try:
			return get_property(self, name)
		except KeyError:
			raise AttributeError(
				f"{type(self).__name__!r} object has no property {name!r}"
			) from None

	@override
	def __setattr__(self, name: str, value: Any) -> None:
		set_property(self, name, value)

	@override
	def __delattr__(self, name: str) -> None:
		if name not in self._slots:
			raise AttributeError(name)
		delete_property(self, name)

	def __getitem__(self, name: str) -> Any:
		return get_property(self, name)

	def __setitem__(self, name: str, value: Any) -> None:
		set_property(self, name, value)

	def __delitem__(self, name: str) -> None:
		if name not in self._slots:
			raise KeyError(name)
		delete_property(self, name)

	def __contains__(self, name: object) -> bool:
		return name in self._slots

	def __iter__(self) -> Iterator[str]:
		return iter(keys(self))

	@override
	def __repr__(self) -> str:
		shown = {
			name: slot.value if isinstance(slot, DataProperty) else "<accessor>"
			for name, slot in self._slots.items()
			if slot.enumerable
		}
		return f"{type(self).__name__}({shown!r})"


def _expect_composite(obj: object) -> None:
	if not isinstance(obj, (PropertyObject, Mapping)):
		raise TypeError(f"Expected a PropertyObject or a mapping, got {type(obj).__name__}")


def own_property_names(obj: Composite) -> list[str]:
	"""All own property names, enumerable or not, in definition order."""
	if isinstance(obj, PropertyObject):
		return list(obj._slots)
	_expect_composite(obj)
	return list(obj)


def keys(obj: Composite) -> list[str]:
	"""Own enumerable property names, in definition order."""
	if isinstance(obj, PropertyObject):
		return [name for name, slot in obj._slots.items() if slot.enumerable]
	_expect_composite(obj)
	return list(obj)


def has_own(obj: Composite, name: str) -> bool:
	_expect_composite(obj)
	return name in obj


def get_own_property_descriptor(obj: Composite, name: str) -> dict[str, Any] | None:
	if isinstance(obj, PropertyObject):
		slot = obj._slots.get(name)
		return slot.to_descriptor() if slot is not None else None
	_expect_composite(obj)
	if name not in obj:
		return None
	return DataProperty(obj[name], True, True, True).to_descriptor()


def get_property(obj: Composite, name: str, default: Any = MISSING) -> Any:
	"""Read `name`: the stored value, or the getter's result for accessors.

	Raises KeyError for a missing property unless `default` is given.
	"""
	if isinstance(obj, PropertyObject):
		slot = obj._slots.get(name)
		if slot is not None:
			if isinstance(slot, DataProperty):
				return slot.value
			return slot.get() if slot.get is not None else None
	else:
		_expect_composite(obj)
		if name in obj:
			return obj[name]
	if default is MISSING:
		raise KeyError(name)
	return default


def _refuse(obj: Composite, name: str, action: str) -> bool:
	message = f"Cannot {action} {name!r} of {type(obj).__name__}"
	if get_config().strict:
		raise PropertyWriteError(message)
	logger.debug("Ignored: %s", message)
	return False


def set_property(obj: Composite, name: str, value: Any) -> bool:
	"""Assign `value` to `name`, following the slot's flags.

	Returns False when the slot refuses the write (read-only data property or
	accessor without setter). With `strict` configured, raises
	PropertyWriteError instead.
	"""
	if isinstance(obj, PropertyObject):
		slot = obj._slots.get(name)
		if slot is None:
			obj._slots[name] = DataProperty(value, True, True, True)
			return True
		if isinstance(slot, DataProperty):
			if not slot.writable:
				return _refuse(obj, name, "assign to read only property")
			obj._slots[name] = replace(slot, value=value)
			return True
		if slot.set is None:
			return _refuse(obj, name, "set property which has only a getter")
		slot.set(value)
		return True
	if not isinstance(obj, MutableMapping):
		raise TypeError(f"Cannot assign properties on {type(obj).__name__}")
	obj[name] = value
	return True


def delete_property(obj: Composite, name: str) -> bool:
	"""Remove `name`. Missing properties count as removed.

	Non-configurable properties are kept: False, or PropertyWriteError in
	strict mode.
	"""
	if isinstance(obj, PropertyObject):
		slot = obj._slots.get(name)
		if slot is None:
			return True
		if not slot.configurable:
			return _refuse(obj, name, "delete property")
		del obj._slots[name]
		return True
	if not isinstance(obj, MutableMapping):
		raise TypeError(f"Cannot delete properties on {type(obj).__name__}")
	obj.pop(name, None)
	return True


def same_value(a: Any, b: Any) -> bool:
	"""Identity for objects, value equality for numbers and strings.

	NaN equals NaN, and 0.0 differs from -0.0.
	"""
	if a is b:
		return True
	if type(a) is not type(b):
		return False
	if isinstance(a, float):
		if math.isnan(a) and math.isnan(b):
			return True
		if a == 0 and b == 0:
			return math.copysign(1.0, a) == math.copysign(1.0, b)
		return a == b
	if isinstance(a, (str, bytes, int, complex)):
		return a == b
	return False


def _descriptor_fields(name: str, descriptor: object) -> dict[str, Any]:
	if isinstance(descriptor, PropertyObject):
		raw = {key: get_property(descriptor, key) for key in keys(descriptor)}
	elif isinstance(descriptor, Mapping):
		raw = dict(descriptor)
	else:
		raise InvalidDescriptor(
			f"Property description for {name!r} must be a mapping, got {type(descriptor).__name__}"
		)

	fields = {key: value for key, value in raw.items() if key in DESCRIPTOR_KEYS}
	for flag in _FLAGS:
		if flag in fields:
			fields[flag] = bool(fields[flag])

	if ("get" in fields or "set" in fields) and ("value" in fields or "writable" in fields):
		raise InvalidDescriptor(
			f"Invalid property descriptor for {name!r}. Cannot both specify accessors and a value or writable attribute"
		)
	for key, label in (("get", "Getter"), ("set", "Setter")):
		fn = fields.get(key)
		if fn is not None and not callable(fn):
			raise InvalidDescriptor(f"{label} must be callable: {fn!r}")
	return fields


def _check_locked(name: str, current: Slot, fields: dict[str, Any]) -> None:
	is_accessor = "get" in fields or "set" in fields
	is_data = "value" in fields or "writable" in fields

	def reject() -> None:
		raise InvalidDescriptor(f"Cannot redefine property: {name}")

	if fields.get("configurable") is True:
		reject()
	if "enumerable" in fields and fields["enumerable"] != current.enumerable:
		reject()
	if isinstance(current, DataProperty):
		if is_accessor:
			reject()
		if not current.writable:
			if fields.get("writable") is True:
				reject()
			if "value" in fields and not same_value(fields["value"], current.value):
				reject()
	else:
		if is_data:
			reject()
		if "get" in fields and fields["get"] is not current.get:
			reject()
		if "set" in fields and fields["set"] is not current.set:
			reject()


def _apply(name: str, current: Slot | None, fields: dict[str, Any]) -> Slot:
	is_accessor = "get" in fields or "set" in fields
	is_data = "value" in fields or "writable" in fields

	if current is None:
		if is_accessor:
			return AccessorProperty(
				get=fields.get("get"),
				set=fields.get("set"),
				enumerable=fields.get("enumerable", False),
				configurable=fields.get("configurable", False),
			)
		return DataProperty(
			value=fields.get("value"),
			writable=fields.get("writable", False),
			enumerable=fields.get("enumerable", False),
			configurable=fields.get("configurable", False),
		)

	if not current.configurable:
		_check_locked(name, current, fields)

	enumerable = fields.get("enumerable", current.enumerable)
	configurable = fields.get("configurable", current.configurable)

	# Switching between data and accessor keeps only the two shared flags.
	if isinstance(current, DataProperty) and is_accessor:
		return AccessorProperty(
			get=fields.get("get"),
			set=fields.get("set"),
			enumerable=enumerable,
			configurable=configurable,
		)
	if isinstance(current, AccessorProperty) and is_data:
		return DataProperty(
			value=fields.get("value"),
			writable=fields.get("writable", False),
			enumerable=enumerable,
			configurable=configurable,
		)

	if isinstance(current, DataProperty):
		return DataProperty(
			value=fields.get("value", current.value),
			writable=fields.get("writable", current.writable),
			enumerable=enumerable,
			configurable=configurable,
		)
	return AccessorProperty(
		get=fields.get("get", current.get),
		set=fields.get("set", current.set),
		enumerable=enumerable,
		configurable=configurable,
	)


def define_property(obj: T, name: str, descriptor: object) -> T:
	"""Define or redefine `name` on `obj` from a (partial) descriptor.

	Flags missing from the descriptor default to False for a new property and
	keep their current value for an existing one. Raises InvalidDescriptor for
	contradictory descriptors and for changes a non-configurable property
	forbids.
	"""
	fields = _descriptor_fields(name, descriptor)

	if isinstance(obj, PropertyObject):
		obj._slots[name] = _apply(name, obj._slots.get(name), fields)
		logger.debug("Defined property %r on %s", name, type(obj).__name__)
		return obj

	if not isinstance(obj, MutableMapping):
		raise TypeError(f"Cannot define properties on {type(obj).__name__}")
	current = DataProperty(obj[name], True, True, True) if name in obj else None
	slot = _apply(name, current, fields)
	if not (
		isinstance(slot, DataProperty)
		and slot.writable
		and slot.enumerable
		and slot.configurable
	):
		raise InvalidDescriptor(
			f"A plain {type(obj).__name__} can only hold writable, enumerable, configurable data properties, got {slot!r} for {name!r}"
		)
	obj[name] = slot.value
	return obj


def mixin(target: T, *sources: Composite) -> T:
	"""Copy every own property of each source onto `target`, flags and all.

	Sources are applied in order, so later ones win. The copy is a snapshot of
	each slot; nested values are shared, not copied.
	"""
	for source in sources:
		for name in own_property_names(source):
			descriptor = get_own_property_descriptor(source, name)
			assert descriptor is not None
			define_property(target, name, descriptor)
	return target


__all__ = [
	"AccessorProperty",
	"Composite",
	"DataProperty",
	"MISSING",
	"PropertyObject",
	"Slot",
	"define_property",
	"delete_property",
	"get_own_property_descriptor",
	"get_property",
	"has_own",
	"keys",
	"mixin",
	"own_property_names",
	"same_value",
	"set_property",
]
