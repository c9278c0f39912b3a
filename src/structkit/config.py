"""Configuration for struct factories.

Groups the knobs that decide how a factory names, registers and decorates
the types it produces. Every field has a default, so ``FactoryConfig()``
reproduces the stock behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict

from .exceptions import DefinitionError


@dataclass(frozen=True)
class FactoryConfig:
    """Settings shared by every type a factory produces.

    Attributes:
        normalize_name: Applied to a display name before it is used as the
            type name and registry key. Defaults to ``str.capitalize``, so
            ``"point"`` and ``"POINT"`` both become ``"Point"``.
        anonymous_name: ``__name__`` given to types created without a
            display name.
        allow_rebind: Whether a display name already bound in the target
            namespace may be replaced. Replacing logs a warning.
        accessors: Whether to generate ``record.field`` properties for
            declared fields.
    """
    normalize_name: Callable[[str], str] = field(default=str.capitalize)
    anonymous_name: str = "AnonymousRecord"
    allow_rebind: bool = True
    accessors: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "FactoryConfig":
        """Build a config from plain data (e.g. a ``config:`` section of a
        definitions document). ``normalize_name`` cannot be expressed as data
        and keeps its default.
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise DefinitionError("Factory config must be a mapping")
        allowed = {f.name for f in fields(cls)} - {"normalize_name"}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise DefinitionError(f"Unknown factory config key(s): {', '.join(unknown)}")
        return cls(**data)
