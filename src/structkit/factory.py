"""
Record-Type Factory.

Turns an ordered list of field names into a brand-new ``Record`` subclass.

INVOCATION KINDS:
    Anonymous:  create("name", "age")
        Every argument is a field name. The type is returned unregistered.

    Named:      create("Point", "x", "y")
        A leading string that starts with an uppercase letter is a display
        name, not a field. It is normalized (capitalized by default), used
        as the type's ``__name__`` and registered in the namespace, if one
        is given. A lowercase leading string is always a field, so
        create("point", "x") has the shape (point, x); pass name="point"
        to get a type named Point.

    ``name=`` names the type explicitly and ``anonymous=True`` treats every
    positional argument as a field, for shapes whose first field happens to
    be capitalized.

ORDER OF ASSEMBLY:
    1. shape and accessor properties
    2. built-in operations (inherited from Record)
    3. caller methods, which may shadow 1 and 2
    4. registration

ARCHITECTURAL RULE:
    Every call builds a new class object. Types are never cached or
    shared, even when two calls use the same field names, because each
    call may merge different methods.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple

from .config import FactoryConfig
from .namespace import Namespace
from .record import Record

logger = logging.getLogger(__name__)

# Attributes every class body carries; never copied from a methods class.
_IMPLICIT_CLASS_ATTRS = frozenset({
    "__dict__",
    "__weakref__",
    "__module__",
    "__qualname__",
    "__slots__",
    "__firstlineno__",
    "__static_attributes__",
})


def _is_display_name(arg: Any) -> bool:
    return isinstance(arg, str) and arg[:1].isupper()


def _accessor(name: str) -> property:
    def fget(self):
        return self._values.get(name)

    def fset(self, value):
        self._values[name] = value

    return property(fget, fset, doc=f"Field '{name}'.")


def _build_type(type_name: str, shape: Tuple[str, ...], config: FactoryConfig) -> type:
    body = {
        "__slots__": (),
        "_fields": shape,
        "__doc__": f"{type_name}({', '.join(shape)})",
    }
    if config.accessors:
        for field_name in shape:
            # Built-in operations win over accessors; the field stays
            # reachable through get/set and [].
            if hasattr(Record, field_name):
                logger.debug("%s: no accessor for field %r, name is taken by Record", type_name, field_name)
                continue
            body[field_name] = _accessor(field_name)
    struct_type = type(type_name, (Record,), body)
    struct_type.__qualname__ = type_name
    return struct_type


def _rebind_class_cell(value: Any, struct_type: type) -> Any:
    """
    Return ``value`` with any zero-argument ``super()`` bound to ``struct_type``.

    Functions defined in a class body close over that class as ``__class__``.
    Copied onto the struct type as-is, ``super()`` would still look past the
    methods class instead of reaching Record.
    """
    if isinstance(value, (classmethod, staticmethod)):
        return type(value)(_rebind_class_cell(value.__func__, struct_type))
    if isinstance(value, property):
        return property(
            *(_rebind_class_cell(f, struct_type) if f is not None else None
              for f in (value.fget, value.fset, value.fdel)),
            value.__doc__,
        )
    if not isinstance(value, types.FunctionType):
        return value
    code = value.__code__
    if "__class__" not in code.co_freevars:
        return value
    closure = tuple(
        types.CellType(struct_type) if free == "__class__" else cell
        for free, cell in zip(code.co_freevars, value.__closure__)
    )
    rebound = types.FunctionType(code, value.__globals__, value.__name__, value.__defaults__, closure)
    rebound.__kwdefaults__ = value.__kwdefaults__
    rebound.__qualname__ = value.__qualname__
    rebound.__doc__ = value.__doc__
    rebound.__module__ = value.__module__
    rebound.__dict__.update(value.__dict__)
    return rebound


def _merge_methods(struct_type: type, methods: Any) -> None:
    """
    Merge caller definitions into ``struct_type``.

    ``methods`` may be a mapping of attributes, a class whose namespace is
    copied over, or a callable that receives the new type and decorates it.
    """
    if isinstance(methods, Mapping):
        items: Iterable = methods.items()
    elif isinstance(methods, type):
        items = [
            (attr, _rebind_class_cell(value, struct_type))
            for attr, value in vars(methods).items()
            if attr not in _IMPLICIT_CLASS_ATTRS and not (attr == "__doc__" and value is None)
        ]
    elif callable(methods):
        methods(struct_type)
        return
    else:
        raise TypeError(
            f"methods must be a mapping, a class or a callable, not {type(methods).__name__}"
        )
    for attr, value in items:
        setattr(struct_type, attr, value)


def create(
    *args: Any,
    methods: Any = None,
    name: Optional[str] = None,
    anonymous: bool = False,
    namespace: Optional[Namespace] = None,
    config: Optional[FactoryConfig] = None,
) -> type:
    """
    Produce a new record type.

    Args:
        *args: Field names, optionally preceded by a display name.
        methods: Extra definitions merged into the type after the built-in
            operations (mapping, class or callable).
        name: Explicit display name; all positional arguments are fields.
        anonymous: Treat all positional arguments as fields and skip
            registration.
        namespace: Where a named type is registered. Named types are not
            registered anywhere when omitted.
        config: Factory settings; ``FactoryConfig()`` when omitted.

    Returns:
        The new ``Record`` subclass.
    """
    config = config or FactoryConfig()
    field_names = list(args)

    display_name: Optional[str] = None
    if not anonymous:
        if name is not None:
            display_name = name
        elif field_names and _is_display_name(field_names[0]):
            display_name = field_names.pop(0)
    if display_name is not None:
        display_name = config.normalize_name(str(display_name))

    shape = tuple(str(field_name) for field_name in field_names)
    struct_type = _build_type(display_name or config.anonymous_name, shape, config)
    if methods is not None:
        _merge_methods(struct_type, methods)
    logger.debug("Created struct %s%r", struct_type.__name__, shape)

    if display_name is not None and namespace is not None:
        namespace.register(display_name, struct_type, allow_rebind=config.allow_rebind)
    return struct_type


class StructFactory:
    """
    Factory bound to a namespace and a config.

    Named types it creates are registered into ``self.namespace``, which is
    a fresh ``Namespace`` unless one is injected.

    Example:
        factory = StructFactory()
        factory.create("Point", "x", "y")
        factory.namespace.Point(1, 2)
    """

    def __init__(self, namespace: Optional[Namespace] = None, config: Optional[FactoryConfig] = None) -> None:
        self.namespace = namespace if namespace is not None else Namespace()
        self.config = config or FactoryConfig()

    def create(self, *args: Any, methods: Any = None, name: Optional[str] = None, anonymous: bool = False) -> type:
        return create(
            *args,
            methods=methods,
            name=name,
            anonymous=anonymous,
            namespace=self.namespace,
            config=self.config,
        )
