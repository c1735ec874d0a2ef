"""
Tool settings: the resolved target objects plus tool-specific options.

A tool declares its options as dataclass fields on a `ToolSettings`
subclass. `load_configuration` fills them from a plain property mapping,
coercing each value to the field's declared type:

    @dataclass
    class VacuumSettings(ToolSettings):
        full: bool = False
        freeze: bool = False

Fields declared with `metadata={"required": True}` must be present in the
properties.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from logging import getLogger
from types import UnionType
from typing import Any, Generic, Union, get_args, get_origin

from .exceptions import ConfigurationError
from .tooltypes import DBObject, ObjectT

logger = getLogger(__name__)

OBJECTS_PROPERTY = "objects"
TRUTHY = {"1", "true", "yes", "on", "y", "t"}
FALSY = {"0", "false", "no", "off", "n", "f", ""}

ObjectResolver = Callable[[str], Any]


def coerce_bool(name: str, value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY:
            return True
        if lowered in FALSY:
            return False
    raise ConfigurationError(f"Expected a boolean, got {value!r}", name)


def coerce_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Expected an integer, got {value!r}", name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Expected an integer, got {value!r}", name)


def coerce_value(name: str, target_type, value):
    if target_type is bool:
        return coerce_bool(name, value)
    if target_type is int:
        return coerce_int(name, value)
    if target_type is str:
        if not isinstance(value, (str, int, float)):
            raise ConfigurationError(f"Expected a string, got {value!r}", name)
        return str(value)
    return value


def option_type(declared, current):
    """The concrete type to coerce to; `X | None` and `Optional[X]` give X."""
    if get_origin(declared) in (Union, UnionType):
        members = [arg for arg in get_args(declared) if arg is not type(None)]
        if len(members) == 1:
            declared = members[0]
    if isinstance(declared, type):
        return declared
    return type(current)


def resolve_objects(raw, context: ObjectResolver | None) -> tuple:
    if raw is None:
        raise ConfigurationError("No target objects given", OBJECTS_PROPERTY)
    if isinstance(raw, str):
        raw = [part for part in raw.split(",") if part.strip()]
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"Expected a list of objects, got {raw!r}", OBJECTS_PROPERTY)
    resolver = context or DBObject.parse
    resolved = []
    for item in raw:
        if isinstance(item, str):
            try:
                resolved.append(resolver(item))
            except ConfigurationError:
                raise
            except Exception as e:
                raise ConfigurationError(f"Cannot resolve object {item!r}: {e}", OBJECTS_PROPERTY) from e
        else:
            resolved.append(item)
    return tuple(resolved)


@dataclass
class ToolSettings(Generic[ObjectT]):
    object_list: tuple[ObjectT, ...] = field(default_factory=tuple)

    def get_object_list(self) -> tuple[ObjectT, ...]:
        return self.object_list

    def option_fields(self):
        return [f for f in fields(self) if f.name != "object_list"]

    def load_configuration(self, context: ObjectResolver | None, properties: Mapping[str, Any]):
        """
        Populate the object list and tool options from `properties`.

        Args:
            context: Optional resolver turning an object name into a target
                object. Defaults to `DBObject.parse`.
            properties: Raw task properties.

        Raises:
            ConfigurationError: If a required property is absent or a value
                cannot be coerced.
        """
        self.object_list = resolve_objects(properties.get(OBJECTS_PROPERTY), context)
        for f in self.option_fields():
            if f.name not in properties:
                if f.metadata.get("required"):
                    raise ConfigurationError("Required property is missing", f.name)
                continue
            value = properties[f.name]
            if value is None and type(None) in get_args(f.type):
                setattr(self, f.name, None)
                continue
            target_type = option_type(f.type, getattr(self, f.name))
            setattr(self, f.name, coerce_value(f.name, target_type, value))
        unknown = set(properties) - {OBJECTS_PROPERTY} - {f.name for f in self.option_fields()}
        if unknown:
            logger.warning("Ignoring unknown properties: %s", ", ".join(sorted(unknown)))
