"""
Type resolution tables for target languages.

Maps a closed, language-agnostic vocabulary of type keys to target
syntax fragments. Keys a target does not map resolve to ``UNRESOLVED``
so callers can fall back to rendering the value unqualified.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Union

from .models import SchemaObject

UNRESOLVED = ""


class TypeKey(Enum):
    """Type classifiers understood by every target."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    MAP = "map"
    SET = "set"
    ARRAY = "array"

    @classmethod
    def lookup(cls, value: Union["TypeKey", str, None]) -> Optional["TypeKey"]:
        """Return the matching key, or None for anything outside the vocabulary."""
        if isinstance(value, TypeKey):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


CONTAINER_KEYS = (TypeKey.NULL, TypeKey.MAP, TypeKey.SET, TypeKey.ARRAY)


def _default_generic(container: str, *args: str) -> str:
    return f"{container}<{', '.join(args)}>"


@dataclass(frozen=True)
class TypeTable:
    """
    Per-target type lookup table.

    ``primitives`` maps a primitive key to a mapping of OpenAPI format to
    fragment, where the ``None`` format is the default. ``containers``
    maps structural keys to the container fragment.
    """

    primitives: Mapping[TypeKey, Mapping[Optional[str], str]] = field(
        default_factory=dict
    )
    containers: Mapping[TypeKey, str] = field(default_factory=dict)
    map_key: str = UNRESOLVED
    generic: Callable[..., str] = _default_generic

    def resolve(self, key: Union[TypeKey, str, None], fmt: Optional[str] = None) -> str:
        """
        Resolve a type key to a syntax fragment.

        Args:
            key: A ``TypeKey`` or its string value
            fmt: Optional OpenAPI format for primitive keys

        Returns:
            The fragment, or ``UNRESOLVED`` when the target has no mapping
        """
        type_key = TypeKey.lookup(key)
        if type_key is None:
            return UNRESOLVED

        if type_key in CONTAINER_KEYS:
            return self.containers.get(type_key, UNRESOLVED)

        formats = self.primitives.get(type_key, {})
        if fmt is not None and fmt in formats:
            return formats[fmt]
        return formats.get(None, UNRESOLVED)

    def is_empty(self) -> bool:
        return not self.primitives and not self.containers

    def render(self, schema: Optional[SchemaObject], type_name: Callable[[str], str]) -> str:
        """
        Render a full type expression for a schema.

        Referenced component schemas render as their type name. Returns
        ``UNRESOLVED`` when any fragment needed for the expression is
        missing from the table.
        """
        if schema is None:
            return UNRESOLVED
        if self.is_empty():
            return UNRESOLVED

        if schema.ref:
            return type_name(schema.ref)

        kind = schema.container_kind()
        if kind in (TypeKey.ARRAY, TypeKey.SET):
            container = self.resolve(kind)
            item = self.render(schema.items, type_name)
            if not container or not item:
                return UNRESOLVED
            return self.generic(container, item)

        if kind == TypeKey.MAP:
            container = self.resolve(kind)
            value = self.render(schema.additional_properties, type_name)
            if not container or not value or not self.map_key:
                return UNRESOLVED
            return self.generic(container, self.map_key, value)

        if kind == TypeKey.NULL:
            return self.resolve(kind)

        # Models, enums and unions are named definitions
        named = schema.type == "object" or schema.is_string_enum() or schema.is_union()
        if schema.name and named:
            return type_name(schema.name)

        return self.resolve(schema.type, schema.format)


def build_type_table(
    primitives: Dict[str, Dict[Optional[str], str]],
    containers: Dict[str, str],
    map_key: str = UNRESOLVED,
    generic: Callable[..., str] = _default_generic,
) -> TypeTable:
    """Build a table from plain string-keyed dictionaries."""
    return TypeTable(
        primitives={TypeKey(key): dict(formats) for key, formats in primitives.items()},
        containers={TypeKey(key): value for key, value in containers.items()},
        map_key=map_key,
        generic=generic,
    )
