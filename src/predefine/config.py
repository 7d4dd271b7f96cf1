import os
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Literal, cast, get_args

MergeEquality = Literal["serialized", "deep"]

ENV_PREDEFINE_STRICT = "PREDEFINE_STRICT"
ENV_PREDEFINE_MERGE_EQUALITY = "PREDEFINE_MERGE_EQUALITY"


@dataclass(frozen=True, slots=True)
class PredefineConfig:
	"""Runtime switches for the object model and the merge utility.

	- strict: refused writes and deletes raise PropertyWriteError instead of
	  returning False
	- merge_equality: how merge() decides whether a list already holds an
	  element. "serialized" compares compact JSON text by substring, "deep"
	  uses ==.
	"""

	strict: bool = False
	merge_equality: MergeEquality = "serialized"

	def __post_init__(self) -> None:
		if self.merge_equality not in get_args(MergeEquality):
			raise ValueError(
				f"merge_equality must be one of {get_args(MergeEquality)}, got {self.merge_equality!r}"
			)

	@classmethod
	def from_env(cls) -> "PredefineConfig":
		strict = os.environ.get(ENV_PREDEFINE_STRICT, "")
		equality = os.environ.get(ENV_PREDEFINE_MERGE_EQUALITY) or "serialized"
		return cls(
			strict=strict not in {"", "0", "false", "False"},
			merge_equality=cast(MergeEquality, equality),
		)


PREDEFINE_CONFIG: ContextVar["PredefineConfig | None"] = ContextVar(
	"predefine_config", default=None
)


def get_config() -> PredefineConfig:
	config = PREDEFINE_CONFIG.get()
	if config is None:
		return PredefineConfig.from_env()
	return config


@contextmanager
def configure(**overrides: Any) -> Generator[PredefineConfig, None, None]:
	"""Apply configuration overrides for the duration of a `with` block.

	Example:

	```python
	with configure(strict=True):
	    obj.frozen_name = "x"  # raises PropertyWriteError
	```
	"""
	config = replace(get_config(), **overrides)
	token = PREDEFINE_CONFIG.set(config)
	try:
		yield config
	finally:
		PREDEFINE_CONFIG.reset(token)


__all__ = [
	"ENV_PREDEFINE_MERGE_EQUALITY",
	"ENV_PREDEFINE_STRICT",
	"MergeEquality",
	"PREDEFINE_CONFIG",
	"PredefineConfig",
	"configure",
	"get_config",
]
