"""
OpenAPI document visitor.

Walks a parsed OpenAPI 3 document and builds the generation context for
a target: models, enums and unions from ``components/schemas`` and from
named inline schemas, one operation context per path and method with its
request body and 2xx JSON response, and the server descriptors.
Only local ``#/components/...`` references are followed.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from .codegen.core.models import (
    EnumContext,
    EnumMemberContext,
    FieldContext,
    GenerateArguments,
    ModelContext,
    Operation,
    OperationContext,
    Parameter,
    ParameterContext,
    ParameterObject,
    ReferenceObject,
    SchemaObject,
    ServerObject,
    ServerVariable,
    UnionContext,
    VariantContext,
    is_parameter_object,
)
from .codegen.core.naming import unique_name
from .codegen.core.request import ConfigurationError
from .codegen.core.target import GenerationResult, Target, generate_code
from .logging_config import get_logger

logger = get_logger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

SCHEMAS_PREFIX = "#/components/schemas/"
PARAMETERS_PREFIX = "#/components/parameters/"
REQUEST_BODIES_PREFIX = "#/components/requestBodies/"
RESPONSES_PREFIX = "#/components/responses/"


Definition = Union[ModelContext, EnumContext, UnionContext]


class UnresolvedReferenceError(Exception):
    """Raised when a schema, request body or response reference cannot be resolved."""

    pass


def _is_model(node: Dict[str, Any]) -> bool:
    """True for object schemas that become a named model."""
    if "$ref" in node or "oneOf" in node:
        return False
    if node.get("properties") is not None:
        return True
    return node.get("type") == "object" and "additionalProperties" not in node


def _is_definition(node: Dict[str, Any]) -> bool:
    """True for component schemas rendered as a named model, enum or union."""
    if "$ref" in node:
        return False
    is_enum = node.get("type") == "string" and bool(node.get("enum"))
    return _is_model(node) or is_enum or "oneOf" in node


def _is_json(media_type: str) -> bool:
    essence = media_type.split(";", 1)[0].strip().lower()
    return essence == "application/json" or essence.endswith("+json")


def _child_name(parent: str, suffix: str) -> str:
    # Anonymous parents have anonymous children
    return f"{parent} {suffix}" if parent else ""


class DocumentVisitor:
    """Builds a ``GenerateArguments`` context for one target."""

    def __init__(self, document: Dict[str, Any], target: Target, strict: bool = False):
        self.document = document
        self.target = target
        self.strict = strict or target.config.strict
        self.warnings: List[str] = []

        components = document.get("components") or {}
        self._schemas: Dict[str, Any] = components.get("schemas") or {}
        self._parameters: Dict[str, Any] = components.get("parameters") or {}
        self._request_bodies: Dict[str, Any] = components.get("requestBodies") or {}
        self._responses: Dict[str, Any] = components.get("responses") or {}

        # Models, enums and unions by raw name, in registration order
        self._definitions: Dict[str, Definition] = {}
        self._components: Dict[str, SchemaObject] = {}
        self._in_progress: Set[str] = set()

    def warn(self, message: str):
        logger.warning(message)
        self.warnings.append(message)

    def visit(self) -> GenerateArguments:
        """
        Walk the whole document.

        Raises:
            UnresolvedReferenceError: If a schema reference cannot be resolved
            ConfigurationError: If an operation is malformed and strict mode is on
        """
        info = self.document.get("info") or {}

        for name, node in self._schemas.items():
            if isinstance(node, dict) and _is_definition(node):
                self._component(name)

        operations = self._operations()
        servers = self.target.resolve_servers(self._servers())

        definitions = list(self._definitions.values())
        models = [d for d in definitions if isinstance(d, ModelContext)]
        enums = [d for d in definitions if isinstance(d, EnumContext)]
        unions = [d for d in definitions if isinstance(d, UnionContext)]

        logger.info(
            "Visited document: %d models, %d enums, %d unions, %d operations, %d servers",
            len(models),
            len(enums),
            len(unions),
            len(operations),
            len(servers),
        )
        return GenerateArguments(
            title=str(info.get("title", "")),
            version=str(info.get("version", "")),
            description=info.get("description"),
            servers=servers,
            models=models,
            enums=enums,
            unions=unions,
            operations=operations,
        )

    # Schemas

    def _component(self, name: str) -> SchemaObject:
        if name in self._components:
            return self._components[name]

        node = self._schemas[name]
        self._in_progress.add(name)
        try:
            schema = self.schema(node, name)
        finally:
            self._in_progress.discard(name)
        self._components[name] = schema
        return schema

    def _resolve_schema_ref(self, ref: str) -> SchemaObject:
        if not ref.startswith(SCHEMAS_PREFIX) or ref[len(SCHEMAS_PREFIX):] not in self._schemas:
            raise UnresolvedReferenceError(f"Cannot resolve schema reference: {ref}")

        name = ref[len(SCHEMAS_PREFIX):]
        node = self._schemas[name]
        if not isinstance(node, dict):
            raise UnresolvedReferenceError(f"Schema reference {ref} does not point to a schema")

        if name in self._in_progress:
            if _is_model(node):
                return SchemaObject(name=name, type="object", ref=name)
            self.warn(f"Recursive schema {ref} cannot be inlined")
            return SchemaObject(name=name)

        if _is_model(node):
            return replace(self._component(name), ref=name)

        # Aliases, enums and unions are inlined under the component name
        self._in_progress.add(name)
        try:
            return self.schema(node, name)
        finally:
            self._in_progress.discard(name)

    def schema(self, node: Optional[Dict[str, Any]], name: str = "") -> Optional[SchemaObject]:
        """
        Convert a schema node.

        Named object schemas are registered as models, named string enums
        as enums and named ``oneOf`` schemas as unions.

        Raises:
            UnresolvedReferenceError: If a reference cannot be resolved
        """
        if node is None:
            return None
        if "$ref" in node:
            return self._resolve_schema_ref(node["$ref"])

        schema_type = node.get("type")
        nullable = bool(node.get("nullable", False))
        if isinstance(schema_type, list):
            # OpenAPI 3.1 type arrays
            nullable = nullable or "null" in schema_type
            declared = [t for t in schema_type if t != "null"]
            schema_type = declared[0] if len(declared) == 1 else None

        enum_values = list(node.get("enum") or [])
        nullable = nullable or None in enum_values

        properties = None
        if "properties" in node:
            properties = {
                key: self.schema(value, _child_name(name, key))
                for key, value in (node["properties"] or {}).items()
            }
            schema_type = schema_type or "object"

        items = None
        if isinstance(node.get("items"), dict):
            items = self.schema(node["items"], _child_name(name, "item"))

        additional = node.get("additionalProperties")
        additional_properties = None
        if isinstance(additional, dict):
            additional_properties = self.schema(additional, _child_name(name, "value"))
        elif additional is True:
            additional_properties = SchemaObject()

        one_of = [
            self.schema(variant, _child_name(name, f"variant {index}"))
            for index, variant in enumerate(node.get("oneOf") or [])
            if isinstance(variant, dict)
        ]

        schema = SchemaObject(
            name=name,
            description=node.get("description"),
            type=schema_type,
            format=node.get("format"),
            properties=properties,
            required=list(node.get("required") or []),
            items=items,
            additional_properties=additional_properties,
            unique_items=bool(node.get("uniqueItems", False)),
            nullable=nullable,
            enum=[value for value in enum_values if value is not None],
            one_of=one_of,
        )

        if name and schema.is_union():
            self._register_union(schema)
        elif name and schema.type == "object" and schema.container_kind() is None:
            self._register_model(schema)
        elif name and schema.is_string_enum():
            self._register_enum(schema)
        elif schema_type is None and not schema.enum:
            logger.debug("Schema %r has no resolvable type", name)
        return schema

    def _register_model(self, schema: SchemaObject):
        if schema.name in self._definitions:
            return

        target = self.target
        fields = []
        for key, prop in (schema.properties or {}).items():
            required = schema.is_required(key)
            fields.append(
                FieldContext(
                    name=target.variable_name(key),
                    original_name=key,
                    type=target.field_type(prop, required),
                    doc=target.field_doc(prop.description),
                    required=required,
                )
            )

        self._definitions[schema.name] = ModelContext(
            name=target.type_name(schema.name),
            original_name=schema.name,
            doc=target.model_doc(schema.description),
            fields=fields,
        )

    def _register_enum(self, schema: SchemaObject):
        if schema.name in self._definitions:
            return

        target = self.target
        taken: Set[str] = set()
        members = []
        seen_values: Set[str] = set()
        for value in schema.enum:
            raw = str(value)
            if raw in seen_values:
                continue
            seen_values.add(raw)
            member = target.enum_member_name(raw or "empty")
            members.append(
                EnumMemberContext(
                    name=unique_name(member, taken, target.policy.conflict_suffix),
                    value=raw,
                )
            )

        self._definitions[schema.name] = EnumContext(
            name=target.type_name(schema.name),
            original_name=schema.name,
            doc=target.model_doc(schema.description),
            members=members,
        )

    def _register_union(self, schema: SchemaObject):
        if schema.name in self._definitions:
            return

        target = self.target
        taken: Set[str] = set()
        variants = []
        for index, variant in enumerate(schema.one_of):
            # Referenced models name their variant, anything else is numbered
            raw = variant.ref or f"variant {index}"
            definition = self._definitions.get(variant.ref or variant.name)
            variants.append(
                VariantContext(
                    name=unique_name(
                        target.union_variant_name(raw), taken, target.policy.conflict_suffix
                    ),
                    type=target.field_type(variant),
                    model=definition.name if isinstance(definition, ModelContext) else "",
                )
            )

        self._definitions[schema.name] = UnionContext(
            name=target.interface_name(schema.name),
            original_name=schema.name,
            doc=target.model_doc(schema.description),
            variants=variants,
        )

    # Operations

    def _operations(self) -> List[OperationContext]:
        contexts = []
        seen: Dict[str, str] = {}

        for path, path_item in (self.document.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            shared = path_item.get("parameters") or []

            for method in HTTP_METHODS:
                node = path_item.get(method)
                if not isinstance(node, dict):
                    continue

                registered = dict(self._definitions)
                try:
                    context = self._operation(method, path, node, shared)
                except ConfigurationError as e:
                    if self.strict:
                        raise
                    # Drop inline definitions of the skipped operation
                    self._definitions = registered
                    self.warn(f"Skipping {method.upper()} {path}: {e}")
                    continue

                route = f"{method.upper()} {path}"
                if context.name in seen:
                    self.warn(
                        f"Operation name {context.name!r} of {route} "
                        f"duplicates {seen[context.name]}"
                    )
                seen.setdefault(context.name, route)
                contexts.append(context)

        return contexts

    def _operation(
        self, method: str, path: str, node: Dict[str, Any], shared: List[Any]
    ) -> OperationContext:
        raw_name = node.get("operationId") or node.get("summary") or f"{method} {path}"
        parameters = self._merge_parameters(shared, node.get("parameters") or [])
        media_type, body = self._request_body(node.get("requestBody"), f"{raw_name} body")
        response = self._response(node.get("responses"), f"{raw_name} response")

        operation = Operation(
            method=method,
            path=path,
            parameters=parameters,
            request_body=body,
            request_media_type=media_type,
            response=response,
            operation_id=node.get("operationId"),
            summary=node.get("summary"),
            description=node.get("description"),
        )

        target = self.target
        # Raises ConfigurationError before anything else is rendered
        statements = target.build_request_statements(operation)

        response_model = ""
        if response is not None:
            definition = self._definitions.get(response.ref or response.name)
            if isinstance(definition, ModelContext):
                response_model = definition.name

        concrete = [p for p in parameters if isinstance(p, ParameterObject)]
        return OperationContext(
            name=target.operation_id(operation),
            method=target.http_method(method),
            path=target.render_path(path),
            doc=target.operation_doc(operation.description or operation.summary),
            params=target.operation_params(operation),
            request_statements=statements,
            parameters=[
                ParameterContext(
                    name=argument,
                    original_name=p.name,
                    location=p.location,
                    type=target.parameter_type(p),
                    required=p.required,
                )
                for p, argument in zip(concrete, target.parameter_names(operation))
            ],
            body_name=target.body_name(operation),
            body_type=target.field_type(body) if body is not None else "",
            has_body=body is not None,
            params_struct=target.params_struct(operation),
            has_response=response is not None,
            response_type=target.response_type(operation),
            response_model=response_model,
        )

    def _merge_parameters(self, shared: List[Any], own: List[Any]) -> List[Parameter]:
        """Path-level parameters first, overridden by operation parameters of the same name and location."""
        merged: Dict[Tuple[str, str], Parameter] = {}
        unresolved: List[Parameter] = []

        for node in list(shared) + list(own):
            parameter = self._parameter(node)
            if is_parameter_object(parameter):
                merged[(parameter.name, parameter.location)] = parameter
            else:
                unresolved.append(parameter)

        return list(merged.values()) + unresolved

    def _parameter(self, node: Dict[str, Any]) -> Parameter:
        if "$ref" in node:
            ref = node["$ref"]
            name = ref[len(PARAMETERS_PREFIX):] if ref.startswith(PARAMETERS_PREFIX) else None
            if name is None or name not in self._parameters:
                self.warn(f"Unresolved parameter reference {ref} is skipped")
                return ReferenceObject(ref=ref)
            node = self._parameters[name]

        location = node.get("in", "query")
        return ParameterObject(
            name=node["name"],
            location=location,
            required=bool(node.get("required", location == "path")),
            description=node.get("description"),
            schema=self.schema(node.get("schema")),
        )

    def _request_body(
        self, node: Optional[Dict[str, Any]], name: str
    ) -> Tuple[Optional[str], Optional[SchemaObject]]:
        if node is None:
            return None, None

        if "$ref" in node:
            ref = node["$ref"]
            key = ref[len(REQUEST_BODIES_PREFIX):] if ref.startswith(REQUEST_BODIES_PREFIX) else None
            if key is None or key not in self._request_bodies:
                raise UnresolvedReferenceError(f"Cannot resolve request body reference: {ref}")
            node = self._request_bodies[key]
            name = key

        content = node.get("content") or {}
        if not content:
            return None, None

        media_type, media = next(iter(content.items()))
        if len(content) > 1:
            logger.debug("Request body %r declares %d media types, using %s", name, len(content), media_type)

        schema_node = (media or {}).get("schema")
        if schema_node is None:
            return media_type, SchemaObject(name=name)
        return media_type, self.schema(schema_node, name)

    def _response(self, responses: Optional[Dict[str, Any]], name: str) -> Optional[SchemaObject]:
        """Schema of the first 2xx response with a JSON body, if any."""
        if not isinstance(responses, dict):
            return None

        status = next((key for key in responses if str(key).startswith("2")), None)
        if status is None:
            return None

        node = responses[status] or {}
        if "$ref" in node:
            ref = node["$ref"]
            key = ref[len(RESPONSES_PREFIX):] if ref.startswith(RESPONSES_PREFIX) else None
            if key is None or key not in self._responses:
                raise UnresolvedReferenceError(f"Cannot resolve response reference: {ref}")
            node = self._responses[key] or {}

        for media_type, media in (node.get("content") or {}).items():
            schema_node = (media or {}).get("schema")
            if _is_json(media_type) and schema_node is not None:
                return self.schema(schema_node, name)

        logger.debug("Response %s of %r has no JSON schema", status, name)
        return None

    # Servers

    def _servers(self) -> List[ServerObject]:
        servers = []
        for node in self.document.get("servers") or []:
            variables = {
                key: ServerVariable(
                    default=str(value.get("default", "")),
                    enum=[str(v) for v in value.get("enum") or []],
                    description=value.get("description"),
                )
                for key, value in (node.get("variables") or {}).items()
            }
            servers.append(
                ServerObject(
                    url=node.get("url", "/"),
                    description=node.get("description"),
                    variables=variables,
                )
            )
        return servers


def build_generate_arguments(
    document: Dict[str, Any], target: Target, strict: bool = False
) -> Tuple[GenerateArguments, List[str]]:
    """
    Build the generation context of a document for a target.

    Args:
        document: Parsed OpenAPI document
        target: Target whose naming, types and syntax are applied
        strict: Re-raise malformed operations instead of skipping them

    Returns:
        Tuple of (generation context, warnings)
    """
    visitor = DocumentVisitor(document, target, strict=strict)
    args = visitor.visit()
    return args, visitor.warnings


def generate_from_document(
    document: Dict[str, Any], target: Target, strict: bool = False
) -> GenerationResult:
    """
    Build the context of a document and render it.

    Reference and configuration errors are returned as a failed result.
    """
    try:
        args, warnings = build_generate_arguments(document, target, strict)
    except (UnresolvedReferenceError, ConfigurationError) as e:
        logger.error("Cannot build generation context: %s", e)
        return GenerationResult.error(str(e), exception=e)
    return generate_code(target, args, warnings)
