"""
Declarative struct type definitions.

Describes record *types* (name and shape) as plain data so a set of
structs can be declared in a JSON or YAML document and built in one go.
Instances are never written or read here.

Document format:

    config:                 # optional, see FactoryConfig.from_dict
      allow_rebind: false
    structs:
      Point: [x, y]
      Person:
        fields: [name, age]

Methods cannot be expressed as data; attach them in code.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

import yaml

from structkit.config import FactoryConfig
from structkit.exceptions import DefinitionError
from structkit.factory import StructFactory
from structkit.record import Record


def _fields_from_entry(name: str, entry: Any) -> List[str]:
    if isinstance(entry, dict):
        if "fields" not in entry:
            raise DefinitionError(f"Struct '{name}' has no 'fields' entry")
        entry = entry["fields"]
    if entry is None:
        return []
    if not isinstance(entry, list):
        raise DefinitionError(f"Fields of struct '{name}' must be a list, got {type(entry).__name__}")
    return [str(field_name) for field_name in entry]


def definitions_from_dict(d: Dict[str, Any], factory: Optional[StructFactory] = None) -> Dict[str, type]:
    """
    Build every struct declared in ``d``.

    When no factory is given, one is created from the document's
    ``config`` section. Types are registered in the factory's namespace
    and also returned, keyed by their normalized names.
    """
    if not isinstance(d, dict):
        raise DefinitionError("Definitions document must be a mapping")
    structs = d.get("structs")
    if structs is None:
        structs = {}
    if not isinstance(structs, dict):
        raise DefinitionError("'structs' must be a mapping of name to fields")
    if factory is None:
        factory = StructFactory(config=FactoryConfig.from_dict(d.get("config")))

    built: Dict[str, type] = {}
    for name, entry in structs.items():
        struct_type = factory.create(*_fields_from_entry(str(name), entry), name=str(name))
        built[struct_type.__name__] = struct_type
    return built


def definitions_to_dict(types: Iterable[type]) -> Dict[str, Any]:
    structs: Dict[str, Any] = {}
    for struct_type in types:
        if not (isinstance(struct_type, type) and issubclass(struct_type, Record)):
            raise TypeError(f"Not a struct type: {struct_type!r}")
        structs[struct_type.__name__] = {"fields": struct_type.shape()}
    return {"structs": structs}


def definitions_to_json(types: Iterable[type]) -> str:
    return json.dumps(definitions_to_dict(types), sort_keys=True)


def definitions_from_json(s: str, factory: Optional[StructFactory] = None) -> Dict[str, type]:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"Invalid JSON definitions: {exc}") from exc
    return definitions_from_dict(d, factory)


def definitions_to_yaml(types: Iterable[type]) -> str:
    return yaml.safe_dump(definitions_to_dict(types))


def definitions_from_yaml(s: str, factory: Optional[StructFactory] = None) -> Dict[str, type]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as exc:
        raise DefinitionError(f"Invalid YAML definitions: {exc}") from exc
    return definitions_from_dict(d, factory)
