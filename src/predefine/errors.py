class PredefineError(Exception):
	"""Base class for errors raised by predefine."""


class InvalidDescriptor(PredefineError, TypeError):
	"""Raised when a descriptor cannot be applied to a property slot.

	Covers contradictory descriptors (accessor and value keys together),
	accessor functions that are not callable, redefinitions a
	non-configurable slot forbids, and descriptors a plain mapping cannot hold.
	"""


class PropertyWriteError(PredefineError, AttributeError):
	"""Raised in strict mode when a write or delete is refused by a slot."""


__all__ = ["InvalidDescriptor", "PredefineError", "PropertyWriteError"]
