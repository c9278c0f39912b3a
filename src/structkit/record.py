"""
Record base class.

Every type produced by the factory is a direct subclass of ``Record``.
The subclass contributes only its shape (``_fields``), optional accessor
properties and whatever methods the caller merged in; all behaviour
lives here.

STORAGE MODEL:
    Field values live in an ordered ``dict`` (``_values``) keyed by
    field name. Position is the dict's insertion order, so integer keys
    and name keys address the same slots.

    The declared shape (``_fields``) is fixed on the class. An instance's
    storage starts out as exactly that shape, but writing an unknown name
    adds a trailing slot to that one instance. Every operation below
    works on storage, not on the declared shape, so ``members()`` and
    ``size()`` reflect such widening.

SOFT MISSES:
    Lookups never raise. Unknown names, out-of-range positions and
    non-diggable values inside ``dig`` all produce ``None``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Optional, Tuple

from .exceptions import ArityError

logger = logging.getLogger(__name__)


def _is_position(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _dig_into(value: Any, path: Tuple[Any, ...]) -> Any:
    """Follow ``path`` through nested values, returning ``None`` on a miss."""
    for depth, key in enumerate(path):
        if value is None:
            return None
        dig = getattr(value, "dig", None)
        if callable(dig):
            return dig(*path[depth:])
        if isinstance(value, Mapping):
            try:
                value = value.get(key)
            except TypeError:
                # unhashable key
                return None
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if not _is_position(key):
                return None
            try:
                value = value[key]
            except IndexError:
                return None
        else:
            return None
    return value


class Record:
    """
    Fixed-shape container with struct-like operations.

    Not meant to be instantiated directly: ``Record`` itself has an empty
    shape. Use ``structkit.create`` to produce a subclass.

    Example:
        Point = create("Point", "x", "y")
        p = Point(1, 2)
        p["x"], p[1], p.x      # 1, 2, 1
        p.members()            # ["x", "y"]
    """

    __slots__ = ("_values",)

    _fields: ClassVar[Tuple[str, ...]] = ()

    # Instances are mutable; equality is structural, so no hashing.
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *values: Any) -> None:
        if len(values) > len(self._fields):
            raise ArityError(type(self).__name__, len(self._fields), len(values))
        self._values: Dict[str, Any] = {}
        for index, name in enumerate(self._fields):
            self._values[name] = values[index] if index < len(values) else None

    @classmethod
    def shape(cls) -> List[str]:
        """Declared field names, unaffected by instance widening."""
        return list(cls._fields)

    # ------------------------------------------------------------------
    # Indexed / named access

    def _name_at(self, index: int) -> Optional[str]:
        names = list(self._values)
        try:
            return names[index]
        except IndexError:
            return None

    def get(self, key: Any) -> Any:
        """
        Return the value at ``key``.

        Integer keys address the slot at that position in storage order
        (negative positions count from the end). Any other key is treated
        as a field name. Misses return None.
        """
        if _is_position(key):
            name = self._name_at(key)
            return None if name is None else self._values[name]
        return self._values.get(str(key))

    def set(self, key: Any, value: Any) -> None:
        """
        Write ``value`` at ``key``.

        An out-of-range position writes nothing. An unknown name adds a new
        trailing slot to this instance only; the type's shape is unchanged.
        """
        if _is_position(key):
            name = self._name_at(key)
            if name is None:
                logger.debug("%s: position %d out of range, write ignored", type(self).__name__, key)
                return
            self._values[name] = value
            return
        name = str(key)
        if name not in self._values:
            logger.debug("%s: widening instance storage with %r", type(self).__name__, name)
        self._values[name] = value

    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    # ------------------------------------------------------------------
    # Collection operations

    def each(self, visit: Callable[[Any], Any]) -> List[Any]:
        return [visit(value) for value in self._values.values()]

    def each_pair(self, visit: Callable[[str, Any], Any]) -> List[Any]:
        return [visit(name, value) for name, value in self._values.items()]

    def dig(self, name: Any, *path: Any) -> Any:
        """
        Look up ``name`` and keep descending through ``path``.

        Nested records, mappings and (integer-indexed) sequences can be
        traversed. Anything else met while a path remains yields None.
        """
        value = self.get(name)
        if value is None or not path:
            return value
        return _dig_into(value, path)

    def size(self) -> int:
        return len(self._values)

    length = size

    def members(self) -> List[str]:
        return list(self._values)

    def select(self, predicate: Callable[[Any], Any]) -> List[Any]:
        """Values for which ``predicate`` holds. None values are never returned."""
        return [value for value in self._values.values() if predicate(value) and value is not None]

    def to_list(self) -> List[Any]:
        return list(self._values.values())

    to_a = to_list

    def values_at(self, *indices: int) -> List[Any]:
        values = self.to_list()
        result = []
        for index in indices:
            try:
                result.append(values[index])
            except IndexError:
                result.append(None)
        return result

    def equals(self, other: Any) -> bool:
        """
        Structural equality.

        Only instances of the very same produced type compare equal; a type
        that merely has the same field names does not. Values are compared
        slot by slot in storage order.
        """
        if type(other) is not type(self):
            return False
        return list(self._values.items()) == list(other._values.items())

    # ------------------------------------------------------------------
    # Python protocol

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.equals(other)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"{type(self).__name__}({body})"
