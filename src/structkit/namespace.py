"""
Namespace: where named struct types get registered.

A factory call with a display name binds the produced type under that
name. Instead of writing into a hidden global, the binding goes into a
``Namespace`` the caller owns and passes in.

A namespace can wrap any mutable mapping, so callers that want the
types to appear as module attributes can pass the module's ``vars()``:

    ns = Namespace(vars(my_module))
    create("Point", "x", "y", namespace=ns)
    my_module.Point

Notes
-----
- Single writer assumed; no locking.
- Rebinding a name replaces the old type and logs a warning, unless
  the caller asks for rebinding to be refused.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, MutableMapping, Optional

from .exceptions import RegistrationError

logger = logging.getLogger(__name__)


class Namespace:
    """
    Name → struct type bindings.

    Parameters
    ----------
    target : MutableMapping, optional
        Mapping the bindings are written into. A private dict is used
        when omitted.
    """

    def __init__(self, target: Optional[MutableMapping[str, Any]] = None) -> None:
        self._target: MutableMapping[str, Any] = {} if target is None else target

    # ------------------------------------------------------------

    def register(self, name: str, struct_type: type, allow_rebind: bool = True) -> type:
        """
        Bind ``struct_type`` under ``name`` and return it.

        Raises
        ------
        RegistrationError
            If ``name`` is already bound and ``allow_rebind`` is False.
        """
        if name in self._target:
            if not allow_rebind:
                raise RegistrationError(f"Struct '{name}' is already registered.")
            logger.warning("Rebinding already registered struct '%s'", name)
        self._target[name] = struct_type
        logger.debug("Registered struct '%s'", name)
        return struct_type

    def get(self, name: str, default: Any = None) -> Any:
        return self._target.get(name, default)

    def names(self) -> List[str]:
        """Registered names, sorted."""
        return sorted(self._target)

    # ------------------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        try:
            return self._target[name]
        except KeyError:
            raise RegistrationError(f"Unknown struct '{name}'.") from None

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._target[name]
        except KeyError:
            raise AttributeError(f"Namespace has no struct '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._target

    def __iter__(self) -> Iterator[str]:
        return iter(self._target)

    def __len__(self) -> int:
        return len(self._target)

    def __repr__(self) -> str:
        return f"Namespace({self.names()!r})"
