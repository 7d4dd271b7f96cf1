from rich.console import Console
from rich.table import Table
from rich.text import Text

from predefine.objects import Composite, get_own_property_descriptor, own_property_names


def _flag(value: bool) -> Text:
	return Text("yes", style="green") if value else Text("no", style="red")


def descriptor_table(obj: Composite, *, title: str | None = None) -> Table:
	"""Build a table with one row per own property of `obj` and its flags.

	Accessors are shown by which functions they define; getters are not called.
	"""
	table = Table(title=title)
	table.add_column("name", style="cyan")
	table.add_column("kind")
	table.add_column("value")
	table.add_column("enumerable")
	table.add_column("writable")
	table.add_column("configurable")

	for name in own_property_names(obj):
		descriptor = get_own_property_descriptor(obj, name)
		assert descriptor is not None
		if "value" in descriptor:
			kind = "data"
			value = Text(repr(descriptor["value"]))
			writable = _flag(descriptor["writable"])
		else:
			kind = "accessor"
			parts = [key for key in ("get", "set") if descriptor[key] is not None]
			value = Text(", ".join(parts) or "-", style="italic")
			writable = Text("-")
		table.add_row(
			Text(str(name)),
			kind,
			value,
			_flag(descriptor["enumerable"]),
			writable,
			_flag(descriptor["configurable"]),
		)
	return table


def print_descriptors(obj: Composite, console: Console | None = None) -> None:
	(console or Console()).print(descriptor_table(obj))


__all__ = ["descriptor_table", "print_descriptors"]
