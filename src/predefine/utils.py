from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping, Sequence
from typing import Any, Final, TypeVar

from predefine.config import get_config
from predefine.objects import (
	Composite,
	PropertyObject,
	delete_property,
	get_property,
	keys,
)

logger = logging.getLogger(__name__)

C = TypeVar("C")

# Keys that would rewire default attribute lookup for unrelated objects if a
# merge target treated them as prototype links.
UNSAFE_MERGE_KEYS: Final = frozenset({"__proto__", "constructor", "prototype"})


def _is_collection(value: object) -> bool:
	if isinstance(value, (str, bytes, bytearray)):
		return False
	return isinstance(value, (PropertyObject, Mapping, Sequence))


def _entries(collection: Any) -> Iterator[tuple[Any, Any]]:
	if not _is_collection(collection):
		raise TypeError(f"Expected a sequence or a mapping, got {type(collection).__name__}")
	if isinstance(collection, PropertyObject):
		for name in keys(collection):
			# The iterator may delete properties it has not reached yet.
			if name in collection:
				yield name, get_property(collection, name)
	elif isinstance(collection, Mapping):
		for key in list(collection):
			if key in collection:
				yield key, collection[key]
	else:
		index = 0
		while index < len(collection):
			yield index, collection[index]
			index += 1


def each(collection: C, iterator: Callable[..., Any], context: Any = None) -> C:
	"""Call `iterator(key, value)` for every element of `collection`.

	Sequences are visited by index, mappings and PropertyObjects by enumerable
	key. Iteration stops as soon as the iterator returns `False` (not merely a
	falsy value).

	Passing a non-empty `context` selects the legacy calling convention
	`iterator(value, *context)` and emits a DeprecationWarning.
	"""
	if not context:
		for key, value in _entries(collection):
			if iterator(key, value) is False:
				break
		return collection

	warnings.warn(
		"each(..., context) is deprecated; use an iterator taking (key, value)",
		DeprecationWarning,
		stacklevel=2,
	)
	args = tuple(context) if isinstance(context, (list, tuple)) else (context,)
	for _, value in _entries(collection):
		if iterator(value, *args) is False:
			break
	return collection


def remove(obj: Composite | None, keep: Iterable[str] = ()) -> bool:
	"""Delete every own enumerable property of `obj` not listed in `keep`.

	Non-enumerable properties survive. Returns False when there is no object.
	"""
	if obj is None:
		return False
	kept = frozenset(keep)
	for name in keys(obj):
		if name not in kept:
			delete_property(obj, name)
	return True


_JSON_KEY_TYPES: Final = (str, int, float, bool, type(None))


def _jsonable(value: Any) -> Any:
	# json.dumps only accepts scalar keys; anything else is keyed by its str().
	if isinstance(value, PropertyObject):
		value = {name: get_property(value, name) for name in keys(value)}
	if isinstance(value, Mapping):
		return {
			key if isinstance(key, _JSON_KEY_TYPES) else str(key): _jsonable(item)
			for key, item in value.items()
		}
	if isinstance(value, (list, tuple)):
		return [_jsonable(item) for item in value]
	return value


def _serialize(value: Any) -> str:
	return json.dumps(_jsonable(value), separators=(",", ":"), ensure_ascii=False, default=str)


def _contains(target: list[Any], item: Any) -> bool:
	if get_config().merge_equality == "deep":
		return any(existing == item for existing in target)
	# Loose on purpose: [10] "contains" 1 because "1" is a substring of "[10]".
	return _serialize(item) in _serialize(target)


def merge(target: Any, additional: Any) -> Any:
	"""Merge `additional` into `target` and return the result.

	- list target: append each element of `additional` that the target does
	  not already hold (see `merge_equality` in PredefineConfig)
	- mapping or PropertyObject target: copy missing keys by reference and
	  merge existing ones recursively; keys in UNSAFE_MERGE_KEYS
	  (`__proto__`, `constructor`, `prototype`) are skipped with a warning,
	  for plain dicts as well
	- anything else: `additional` replaces `target`

	Lists and mappings are modified in place. A scalar `additional` leaves a
	collection target untouched.
	"""
	if isinstance(target, list):
		if not _is_collection(additional):
			return target
		for _, item in _entries(additional):
			if not _contains(target, item):
				target.append(item)
		return target

	if isinstance(target, (PropertyObject, MutableMapping)):
		if not _is_collection(additional):
			return target
		for key, value in _entries(additional):
			if key in UNSAFE_MERGE_KEYS:
				logger.warning(
					"Skipping unsafe key %r while merging into %s",
					key,
					type(target).__name__,
				)
				continue
			if key in target:
				target[key] = merge(target[key], value)
			else:
				target[key] = value
		return target

	return additional


__all__ = ["UNSAFE_MERGE_KEYS", "each", "merge", "remove"]
