"""
structkit: runtime struct types.

Builds lightweight record types from a list of field names:

    Point = create("Point", "x", "y", namespace=ns)
    p = Point(1, 2)
    p.x, p["y"], p[0]          # 1, 2, 1
    p == Point(1, 2)           # True

Each factory call produces a new, independent class. Instances hold one
slot per field, addressable by name or position, and offer Struct-style
collection operations (each, each_pair, dig, select, values_at, ...).

This package only builds types in memory. It does not persist or parse
record instances.
"""

from .config import FactoryConfig
from .exceptions import ArityError, DefinitionError, RegistrationError, StructError
from .factory import StructFactory, create
from .namespace import Namespace
from .record import Record

__version__ = "0.1.0"

__all__ = [
    "ArityError",
    "DefinitionError",
    "FactoryConfig",
    "Namespace",
    "Record",
    "RegistrationError",
    "StructError",
    "StructFactory",
    "create",
]
