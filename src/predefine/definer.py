from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from predefine.descriptor import READABLE, is_descriptor
from predefine.objects import (
	Composite,
	PropertyObject,
	define_property,
	get_own_property_descriptor,
	mixin,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Definer:
	"""Defines properties on one target, with `pattern` as default flags.

	Calling a definer returns the definer, so definitions chain:

	```python
	define = make_definer(obj, WRITABLE)
	define("name", "demo")("size", 3)
	```
	"""

	target: Composite
	pattern: Mapping[str, Any] = READABLE

	def __call__(self, name: str, value: Any, bypass: bool = False) -> Definer:
		"""Define `name` on the target.

		`value` is used as a partial descriptor when it looks like one (see
		is_descriptor), otherwise it becomes the property's value. Its keys
		override the pattern's. With `bypass`, the pattern is ignored, which is
		needed for accessors since patterns usually carry `writable`.
		"""
		description = value if is_descriptor(value) else {"value": value}
		if bypass:
			define_property(self.target, name, description)
		else:
			define_property(self.target, name, mixin({}, self.pattern, description))
		return self


def make_definer(target: Composite, pattern: Mapping[str, Any] | None = None) -> Definer:
	"""Return a Definer bound to `target`, defaulting to the READABLE pattern."""
	if not isinstance(target, (PropertyObject, MutableMapping)):
		raise TypeError(
			f"make_definer() requires a PropertyObject or a mutable mapping, got {type(target).__name__}"
		)
	return Definer(target=target, pattern=READABLE if pattern is None else pattern)


def lazy(obj: Composite, name: str, compute: Callable[[], Any]) -> None:
	"""Define `name` on `obj` as a value computed on first read.

	The first read calls `compute()` and replaces the accessor with a plain,
	read-only data property holding the result. Assigning before the first
	read stores the assigned value instead and `compute` is never called.
	"""
	define = make_definer(obj)
	lock = threading.RLock()
	computing = False

	def settle(value: Any) -> Any:
		define(name, {"value": value}, True)
		return value

	def resolved() -> dict[str, Any] | None:
		current = get_own_property_descriptor(obj, name)
		if current is not None and "value" in current:
			return current
		return None

	def read() -> Any:
		nonlocal computing
		with lock:
			# Another reader may have settled the value while we waited.
			current = resolved()
			if current is not None:
				return current["value"]
			# Only the computing thread can get here again while the lock is held.
			if computing:
				raise RuntimeError(f"Lazy property {name!r} was read while computing itself")
			logger.debug("Computing lazy property %r", name)
			computing = True
			try:
				return settle(compute())
			finally:
				computing = False

	def write(value: Any) -> None:
		with lock:
			settle(value)

	define(name, {"get": read, "set": write, "configurable": True}, True)


__all__ = ["Definer", "lazy", "make_definer"]
