"""
Exceptions raised by structkit.

Only construction and registration can fail loudly. Field lookups,
positional writes past the end and dig traversal are soft misses and
never raise.
"""
from __future__ import annotations


class StructError(Exception):
    """Base class for all structkit errors."""


class ArityError(StructError, TypeError):
    """Raised when a record is constructed with more values than fields."""

    def __init__(self, type_name: str, expected: int, given: int) -> None:
        super().__init__(
            f"{type_name}() takes at most {expected} value(s) ({given} given)"
        )
        self.type_name = type_name
        self.expected = expected
        self.given = given


class RegistrationError(StructError, KeyError):
    """Raised when a namespace refuses a binding or cannot find a name."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class DefinitionError(StructError, ValueError):
    """Raised when a struct definition document is malformed."""
