"""
Core data model for code generation.

Input records (``SchemaObject``, ``Operation``, ...) are built by the
visitor from an OpenAPI document and are never mutated by targets. Output
records (``TargetServer``, ``OperationContext``, ...) are the fully
transformed generation context handed to templates.
"""

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

if TYPE_CHECKING:
    from .types import TypeKey


@dataclass(frozen=True)
class SchemaObject:
    """Describes a data shape."""

    name: str = ""
    description: Optional[str] = None
    type: Optional[str] = None
    format: Optional[str] = None
    # None means the schema declares no property list at all
    properties: Optional[Mapping[str, "SchemaObject"]] = None
    required: List[str] = field(default_factory=list)
    items: Optional["SchemaObject"] = None
    additional_properties: Optional["SchemaObject"] = None
    unique_items: bool = False
    nullable: bool = False
    enum: List[Any] = field(default_factory=list)
    one_of: List["SchemaObject"] = field(default_factory=list)
    ref: Optional[str] = None

    def is_required(self, property_name: str) -> bool:
        return property_name in self.required

    def is_string_enum(self) -> bool:
        return self.type == "string" and bool(self.enum)

    def is_union(self) -> bool:
        return bool(self.one_of)

    def container_kind(self) -> Optional["TypeKey"]:
        """Structural kind of this schema, or None for primitives and plain objects."""
        from .types import TypeKey

        if self.type == "null":
            return TypeKey.NULL
        if self.type == "array":
            return TypeKey.SET if self.unique_items else TypeKey.ARRAY
        if (
            self.type == "object"
            and not self.properties
            and self.additional_properties is not None
        ):
            return TypeKey.MAP
        return None


@dataclass(frozen=True)
class ReferenceObject:
    """An unresolved ``$ref`` indirection."""

    ref: str


@dataclass(frozen=True)
class ParameterObject:
    """A named value bound to a location."""

    name: str
    location: str
    required: bool = False
    description: Optional[str] = None
    schema: Optional[SchemaObject] = None


Parameter = Union[ParameterObject, ReferenceObject]


@dataclass(frozen=True)
class ServerVariable:
    default: str = ""
    enum: List[str] = field(default_factory=list)
    description: Optional[str] = None


@dataclass(frozen=True)
class ServerObject:
    """A base-URL template plus its variables."""

    url: str
    description: Optional[str] = None
    variables: Mapping[str, ServerVariable] = field(default_factory=dict)


@dataclass(frozen=True)
class Operation:
    """One API route."""

    method: str
    path: str
    parameters: List[Parameter] = field(default_factory=list)
    request_body: Optional[SchemaObject] = None
    request_media_type: Optional[str] = None
    # Schema of the first successful JSON response
    response: Optional[SchemaObject] = None
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None


def is_parameter_object(parameter: Parameter) -> bool:
    """True for concrete parameters, False for unresolved references."""
    return isinstance(parameter, ParameterObject)


# Generation context


@dataclass(frozen=True)
class Replacement:
    key: str
    value: str


@dataclass(frozen=True)
class TargetServer:
    """Server descriptor rendered for a target."""

    url: str
    description: str
    variables: List[str] = field(default_factory=list)
    replacements: List[Replacement] = field(default_factory=list)


@dataclass(frozen=True)
class FieldContext:
    name: str
    original_name: str
    type: str
    doc: str
    required: bool


@dataclass(frozen=True)
class ModelContext:
    name: str
    original_name: str
    doc: str
    fields: List[FieldContext] = field(default_factory=list)


@dataclass(frozen=True)
class EnumMemberContext:
    name: str
    value: str


@dataclass(frozen=True)
class EnumContext:
    """A closed set of string values."""

    name: str
    original_name: str
    doc: str
    members: List[EnumMemberContext] = field(default_factory=list)


@dataclass(frozen=True)
class VariantContext:
    name: str
    type: str
    # Type name of the model this variant holds, empty for other schemas
    model: str = ""


@dataclass(frozen=True)
class UnionContext:
    """Exactly one of several schemas."""

    name: str
    original_name: str
    doc: str
    variants: List[VariantContext] = field(default_factory=list)


@dataclass(frozen=True)
class ParameterContext:
    name: str
    original_name: str
    location: str
    type: str
    required: bool


@dataclass(frozen=True)
class OperationContext:
    """One operation after every target transformation has been applied."""

    name: str
    method: str
    path: str
    doc: str
    params: str
    request_statements: List[str] = field(default_factory=list)
    parameters: List[ParameterContext] = field(default_factory=list)
    body_name: str = ""
    body_type: str = ""
    has_body: bool = False
    params_struct: str = ""
    has_response: bool = False
    response_type: str = ""
    response_model: str = ""


@dataclass(frozen=True)
class GenerateArguments:
    """The read-only context rendered by a target template."""

    title: str = ""
    version: str = ""
    description: Optional[str] = None
    servers: List[TargetServer] = field(default_factory=list)
    models: List[ModelContext] = field(default_factory=list)
    enums: List[EnumContext] = field(default_factory=list)
    unions: List[UnionContext] = field(default_factory=list)
    operations: List[OperationContext] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable representation."""
        return asdict(self)
