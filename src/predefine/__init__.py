"""Property descriptors with default patterns, plus small object utilities.

Usage:
    import predefine as pd

    obj = pd.PropertyObject()
    readable = pd.make_definer(obj)               # READABLE pattern
    writable = pd.make_definer(obj, pd.WRITABLE)

    readable("version", "1.0")                    # hidden, read-only
    writable("cache", {})                         # hidden, assignable
    pd.lazy(obj, "config", load_config)           # computed on first read
"""

from predefine.config import (
	PredefineConfig,
	configure,
	get_config,
)
from predefine.definer import Definer, lazy, make_definer
from predefine.descriptor import (
	DESCRIPTOR_KEYS,
	READABLE,
	WRITABLE,
	Pattern,
	is_descriptor,
)
from predefine.display import descriptor_table, print_descriptors
from predefine.errors import InvalidDescriptor, PredefineError, PropertyWriteError
from predefine.extend import extend
from predefine.objects import (
	AccessorProperty,
	DataProperty,
	PropertyObject,
	define_property,
	delete_property,
	get_own_property_descriptor,
	get_property,
	has_own,
	keys,
	mixin,
	own_property_names,
	set_property,
)
from predefine.utils import UNSAFE_MERGE_KEYS, each, merge, remove

__all__ = [
	# Descriptors and patterns
	"DESCRIPTOR_KEYS",
	"READABLE",
	"WRITABLE",
	"Pattern",
	"is_descriptor",
	# Definers
	"Definer",
	"make_definer",
	"lazy",
	# Object model
	"AccessorProperty",
	"DataProperty",
	"PropertyObject",
	"define_property",
	"delete_property",
	"get_own_property_descriptor",
	"get_property",
	"has_own",
	"keys",
	"mixin",
	"own_property_names",
	"set_property",
	# Utilities
	"UNSAFE_MERGE_KEYS",
	"each",
	"extend",
	"merge",
	"remove",
	# Display
	"descriptor_table",
	"print_descriptors",
	# Configuration
	"PredefineConfig",
	"configure",
	"get_config",
	# Errors
	"InvalidDescriptor",
	"PredefineError",
	"PropertyWriteError",
]
