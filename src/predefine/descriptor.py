"""
Property descriptors: the key allow-list, the validity check and the
shipped default patterns.

A descriptor is a mapping whose keys all come from a fixed set of six names.
Patterns are descriptors used as defaults by a definer; they are immutable
value objects so one instance can be shared by any number of definers.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields
from typing import Any, Final, override

DESCRIPTOR_KEYS: Final = frozenset(
	{
		"configurable",  # slot may be redefined or deleted
		"enumerable",  # slot shows up in keys() and iteration
		"get",  # accessor read function
		"set",  # accessor write function
		"value",  # stored value of a data slot
		"writable",  # stored value may be changed by assignment
	}
)


def is_descriptor(candidate: object) -> bool:
	"""Return True if `candidate` can be used as a property descriptor.

	A descriptor is a non-sequence mapping (or PropertyObject) with at least one
	own enumerable key, where every key is in DESCRIPTOR_KEYS. Only the key
	names are checked: `{"get": f, "set": g, "value": 1}` passes even though
	applying it fails with InvalidDescriptor.
	"""
	from predefine.objects import PropertyObject, keys

	if isinstance(candidate, PropertyObject):
		names: list[Any] = keys(candidate)
	elif isinstance(candidate, Mapping):
		names = list(candidate)
	else:
		return False

	return bool(names) and all(name in DESCRIPTOR_KEYS for name in names)


@dataclass(frozen=True, slots=True, eq=False)
class Pattern(Mapping[str, bool]):
	"""Immutable set of default flags, merged under a caller's descriptor.

	Only the flags that were given show up as mapping keys:

	```python
	dict(Pattern(enumerable=False))  # {"enumerable": False}
	```
	"""

	configurable: bool | None = None
	enumerable: bool | None = None
	writable: bool | None = None

	@override
	def __getitem__(self, key: str) -> bool:
		if key not in _PATTERN_FLAGS:
			raise KeyError(key)
		flag = getattr(self, key)
		if flag is None:
			raise KeyError(key)
		return flag

	@override
	def __iter__(self) -> Iterator[str]:
		return (name for name in _PATTERN_FLAGS if getattr(self, name) is not None)

	@override
	def __len__(self) -> int:
		return sum(1 for _ in self)

	@override
	def __hash__(self) -> int:
		return hash(tuple(self.items()))


_PATTERN_FLAGS: Final = tuple(field.name for field in fields(Pattern))

WRITABLE: Final = Pattern(configurable=True, enumerable=False, writable=True)
READABLE: Final = Pattern(enumerable=False, writable=False)


__all__ = ["DESCRIPTOR_KEYS", "READABLE", "WRITABLE", "Pattern", "is_descriptor"]
