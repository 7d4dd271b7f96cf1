from collections.abc import Mapping
from typing import Any, TypeVar

T = TypeVar("T")


def extend(
	parent: type[T],
	props: Mapping[str, Any] | None = None,
	statics: Mapping[str, Any] | None = None,
) -> type[T]:
	"""Create a subclass of `parent` from a mapping of class members.

	`props` becomes the class body (`__name__` in it names the class, the
	parent's name is used otherwise). `statics` are set on the new class
	afterwards, so they win over `props`.

	Example:

	```python
	Point3D = extend(Point, {"__name__": "Point3D", "z": 0}, {"dimensions": 3})
	```
	"""
	if not isinstance(parent, type):
		raise TypeError(f"extend() requires a class, got {type(parent).__name__}")

	namespace = dict(props or {})
	name = namespace.pop("__name__", parent.__name__)
	namespace.setdefault("__qualname__", name)
	namespace.setdefault("__module__", parent.__module__)

	child = type(parent)(name, (parent,), namespace)
	for key, value in (statics or {}).items():
		setattr(child, key, value)
	return child


__all__ = ["extend"]
