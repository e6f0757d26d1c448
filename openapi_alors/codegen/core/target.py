"""
Target record shared by all output languages.

A ``Target`` bundles the identifier policy, type table, request and URL
syntax, doc formatter and template of one language. Languages build one
with a factory function; nothing subclasses it.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from ...logging_config import get_logger
from . import request, urls
from .config import TargetConfig
from .models import (
    GenerateArguments,
    Operation,
    ParameterObject,
    SchemaObject,
    ServerObject,
    TargetServer,
    is_parameter_object,
)
from .naming import IdentifierPolicy
from .request import RequestSyntax
from .templates import TemplateEngine
from .types import TypeTable
from .urls import UrlSyntax

logger = get_logger(__name__)


class TargetError(Exception):
    """Base exception for target construction and generation errors."""

    pass


def _passthrough(value: str) -> str:
    return value


@dataclass(frozen=True)
class Target:
    """Capability set of one output language."""

    name: str
    file_extension: str
    policy: IdentifierPolicy
    types: TypeTable
    request_syntax: RequestSyntax
    url_syntax: UrlSyntax
    templates: TemplateEngine
    template_name: str
    default_output: str
    config: TargetConfig = field(default_factory=TargetConfig)
    # (description, indent) -> comment text
    comment_style: Callable[[str, int], str] = lambda text, indent: f"// {text}"
    # Nesting depth of each doc comment, in units of config.indent_size
    model_doc_level: int = 0
    field_doc_level: int = 0
    operation_doc_level: int = 0
    method_style: Callable[[str], str] = _passthrough
    optional_style: Callable[[str], str] = _passthrough
    hashable: bool = False
    supports_servers: bool = True
    # Rendered where the type table has no answer
    fallback_type: str = ""

    # Identifier policy

    def type_name(self, raw: str) -> str:
        return self.policy.type_name(raw)

    def variable_name(self, raw: str) -> str:
        return self.policy.variable_name(raw)

    def enum_member_name(self, raw: str) -> str:
        return self.policy.enum_member_name(raw)

    def interface_name(self, raw: str) -> str:
        return self.policy.interface_name(raw)

    def union_variant_name(self, raw: str) -> str:
        return self.policy.union_variant_name(raw)

    # Types

    def resolve_type(self, key: Any, fmt: Optional[str] = None) -> str:
        return self.types.resolve(key, fmt)

    def render_type(self, schema: Optional[SchemaObject]) -> str:
        """Full type expression for a schema, empty when unresolved."""
        return self.types.render(schema, self.type_name)

    def optional(self, type_expr: str) -> str:
        if not type_expr:
            return type_expr
        return self.optional_style(type_expr)

    def field_type(self, schema: Optional[SchemaObject], required: bool = True) -> str:
        """Type of a field or argument, wrapped as optional when not required."""
        type_expr = self.render_type(schema) or self.fallback_type
        nullable = schema is not None and schema.nullable
        if required and not nullable:
            return type_expr
        return self.optional(type_expr)

    def parameter_type(self, parameter: ParameterObject) -> str:
        # Query parameters are always omittable
        required = parameter.required and parameter.location != "query"
        return self.field_type(parameter.schema, required)

    def argument_types(self, operation: Operation) -> List[str]:
        """Types of the call arguments, in the order of ``operation_params``."""
        types = [
            self.parameter_type(p)
            for p in operation.parameters
            if is_parameter_object(p)
        ]
        if operation.request_body is not None:
            types.append(self.field_type(operation.request_body))
        return types

    def response_type(self, operation: Operation) -> str:
        """Type of the decoded response, empty when the operation declares none."""
        if operation.response is None:
            return ""
        return self.field_type(operation.response)

    def is_hashable(self, type_expr: str) -> bool:
        return self.hashable

    # Docs, ids, methods

    def model_doc(self, description: Optional[str]) -> str:
        return self._doc(description, self.model_doc_level)

    def field_doc(self, description: Optional[str]) -> str:
        return self._doc(description, self.field_doc_level)

    def operation_doc(self, description: Optional[str]) -> str:
        return self._doc(description, self.operation_doc_level)

    def _doc(self, description: Optional[str], level: int) -> str:
        if description is None or not self.config.add_comments:
            return ""
        return self.comment_style(description, level * self.config.indent_size)

    def operation_id(self, operation: Operation) -> str:
        """
        Name of the generated call.

        Prefers the declared operation id, then the summary.
        """
        raw = operation.operation_id or operation.summary
        if not raw:
            raw = f"{operation.method} {operation.path}"
            logger.info(
                "Operation %s %s has neither operationId nor summary, naming it from its route",
                operation.method.upper(),
                operation.path,
            )
        return self.variable_name(raw)

    def http_method(self, method: str) -> str:
        return self.method_style(method)

    # Requests

    def build_request_statements(self, operation: Operation) -> List[str]:
        return request.build_request_statements(self.policy, self.request_syntax, operation)

    def parameter_names(self, operation: Operation) -> List[str]:
        """Unique argument names of the parameter objects, in declaration order."""
        return request.parameter_argument_names(self.policy, operation)

    def body_name(self, operation: Operation) -> str:
        return request.body_argument_name(self.policy, operation)

    def params_struct(self, operation: Operation) -> str:
        """Name of the aggregate parameter type, empty below two arguments."""
        if len(request.call_argument_names(self.policy, operation)) < 2:
            return ""
        return self.type_name(f"{self.operation_id(operation)} params")

    def operation_params(self, operation: Operation) -> str:
        types = self.argument_types(operation)
        return request.operation_params(
            self.policy,
            self.request_syntax,
            operation,
            struct_name=self.params_struct(operation),
            single_type=types[0] if len(types) == 1 else "",
        )

    # URLs

    def render_url(self, template: str) -> str:
        return urls.render_url(self.policy, self.url_syntax, template)

    def render_path(self, template: str) -> str:
        return urls.render_path(self.policy, self.url_syntax, template)

    def resolve_servers(self, servers: Sequence[ServerObject]) -> List[TargetServer]:
        if not self.supports_servers:
            return []
        return urls.resolve_servers(self.policy, self.url_syntax, servers)

    # Generation

    @property
    def output_name(self) -> str:
        return self.config.output_file or self.default_output

    def generate(self, args: GenerateArguments) -> Dict[str, str]:
        """
        Render the generation context.

        Args:
            args: Fully transformed generation context

        Returns:
            Mapping of output file name to content
        """
        source = self.templates.render_template(
            self.template_name, {"args": args, "config": self.config}
        )
        files = {self.output_name: source}

        if self.config.emit_debug_dump:
            dump_name = f"{Path(self.output_name).stem}.json"
            files[dump_name] = json.dumps(args.to_dict(), indent=2)

        return files


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str],
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated files by name
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def code(self) -> str:
        """Content of the primary output file."""
        return next(iter(self.files.values()), "")

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files={})
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    target: Target, args: GenerateArguments, warnings: Optional[List[str]] = None
) -> GenerationResult:
    """
    Generate code using the specified target with error handling.

    Args:
        target: Target to render with
        args: Generation context
        warnings: Warnings collected while building the context

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    try:
        files = target.generate(args)
    except Exception as e:
        logger.error("Code generation for %s failed: %s", target.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

    metadata = {
        "language": target.name,
        "file_extension": target.file_extension,
        "files": sorted(files),
        "operation_count": len(args.operations),
        "model_count": len(args.models),
        "enum_count": len(args.enums),
        "union_count": len(args.unions),
        "server_count": len(args.servers),
        "types_resolved": not target.types.is_empty(),
    }
    logger.info(
        "Generated %d file(s) for %s (%d operations, %d models)",
        len(files),
        target.name,
        len(args.operations),
        len(args.models),
    )
    return GenerationResult(files, list(warnings or []), metadata)

