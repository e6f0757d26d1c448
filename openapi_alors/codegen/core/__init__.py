"""
Core code generation infrastructure.

Shared by every target: identifier policy, type tables, request and URL
synthesis, templates, configuration and the target record itself.
"""

from .config import ConfigError, ConfigManager, TargetConfig, load_config
from .models import (
    EnumContext,
    EnumMemberContext,
    FieldContext,
    GenerateArguments,
    ModelContext,
    Operation,
    OperationContext,
    ParameterContext,
    ParameterObject,
    ReferenceObject,
    Replacement,
    SchemaObject,
    ServerObject,
    ServerVariable,
    TargetServer,
    UnionContext,
    VariantContext,
)
from .naming import IdentifierPolicy, NamingCase, create_policy, unique_name
from .request import ConfigurationError, RequestSyntax
from .target import GenerationResult, Target, TargetError, generate_code
from .templates import TemplateEngine, TemplateError
from .types import UNRESOLVED, TypeKey, TypeTable, build_type_table
from .urls import UrlSyntax

__all__ = [
    "ConfigError",
    "ConfigManager",
    "ConfigurationError",
    "EnumContext",
    "EnumMemberContext",
    "FieldContext",
    "GenerateArguments",
    "GenerationResult",
    "IdentifierPolicy",
    "ModelContext",
    "NamingCase",
    "Operation",
    "OperationContext",
    "ParameterContext",
    "ParameterObject",
    "ReferenceObject",
    "Replacement",
    "RequestSyntax",
    "SchemaObject",
    "ServerObject",
    "ServerVariable",
    "Target",
    "TargetConfig",
    "TargetError",
    "TargetServer",
    "TemplateEngine",
    "TemplateError",
    "TypeKey",
    "TypeTable",
    "UNRESOLVED",
    "UnionContext",
    "UrlSyntax",
    "VariantContext",
    "build_type_table",
    "create_policy",
    "generate_code",
    "load_config",
    "unique_name",
]
