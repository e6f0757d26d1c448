"""
OpenAPI client code generation.

Renders a generation context built from an OpenAPI document through one
of the registered language targets.
"""

from .core.config import ConfigManager, TargetConfig, load_config
from .core.models import GenerateArguments
from .core.request import ConfigurationError
from .core.target import GenerationResult, Target, TargetError, generate_code
from .registry import (
    RegistryError,
    TargetRegistry,
    get_language_info,
    get_target,
    is_language_supported,
    list_supported_languages,
)

__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "GenerateArguments",
    "GenerationResult",
    "RegistryError",
    "Target",
    "TargetConfig",
    "TargetError",
    "TargetRegistry",
    "generate_code",
    "get_language_info",
    "get_target",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
]
