"""
Target registry for managing available output languages.

Maps language names and aliases to target factory functions.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.config import TargetConfig, load_config
from .core.target import Target

logger = get_logger(__name__)

TargetFactory = Callable[[Optional[TargetConfig]], Target]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class TargetRegistry:
    """Registry for managing available targets."""

    def __init__(self):
        """Initialize empty registry."""
        self._factories: Dict[str, TargetFactory] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        factory: TargetFactory,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a target factory for a language.

        Args:
            language: Primary language name (e.g., 'rust')
            factory: Callable taking a TargetConfig and returning a Target
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If factory is not callable or an alias conflicts
        """
        if not callable(factory):
            raise RegistryError(f"Target factory for {language} must be callable")

        language_key = language.lower()

        if language_key in self._factories and not replace:
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != language_key]

        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._factories:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{self._aliases[alias_key]}'"
                    )

        self._factories[language_key] = factory
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Unregister a target and its aliases."""
        language_key = language.lower()
        self._factories.pop(language_key, None)

        for alias in [a for a, target in self._aliases.items() if target == language_key]:
            del self._aliases[alias]

    def resolve_name(self, language: str) -> str:
        """
        Resolve a language name or alias to its primary name.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._factories:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No target registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_target(
        self,
        language: str,
        config: Optional[Union[TargetConfig, Dict[str, Any], str, Path]] = None,
    ) -> Target:
        """
        Create a target for a language.

        Args:
            language: Language name or alias
            config: Configuration as TargetConfig, dict of overrides, or JSON file path

        Returns:
            Configured target

        Raises:
            RegistryError: If the language is unknown or target creation fails
        """
        language_key = self.resolve_name(language)
        factory = self._factories[language_key]

        try:
            if isinstance(config, TargetConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(language_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(language_key, custom_config=config)
            elif config is None:
                final_config = load_config(language_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            target = factory(final_config)
        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} target: {e}") from e

        logger.debug("Created %s target", language_key)
        return target

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._factories.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == language_key)

    def is_supported(self, language: str) -> bool:
        language_key = language.lower()
        return language_key in self._factories or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        language_key = self.resolve_name(language)
        target = self.create_target(language_key)

        return {
            "name": target.name,
            "file_extension": target.file_extension,
            "output_file": target.output_name,
            "aliases": self.get_aliases_for_language(language_key),
            "types_resolved": not target.types.is_empty(),
            "supports_servers": target.supports_servers,
            "debug_dump": target.config.emit_debug_dump,
            "reserved_words": len(target.policy.reserved_words),
        }


# Global registry instance - created once
_global_registry: Optional[TargetRegistry] = None


def get_registry() -> TargetRegistry:
    """Get the global target registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = TargetRegistry()
        _auto_register_targets(_global_registry)
    return _global_registry


def _auto_register_targets(registry: TargetRegistry):
    """Register the built-in targets with their aliases."""
    from .languages.ecmascript import create_ecmascript_target
    from .languages.rust import create_rust_target

    registry.register("ecmascript", create_ecmascript_target, aliases=["js", "javascript"])
    registry.register("rust", create_rust_target, aliases=["rs"])


def register_target(language: str, factory: TargetFactory, aliases: Optional[List[str]] = None):
    """Register a target factory in the global registry."""
    get_registry().register(language, factory, aliases)


def get_target(
    language: str,
    config: Optional[Union[TargetConfig, Dict[str, Any], str, Path]] = None,
) -> Target:
    """Get a configured target from the global registry."""
    return get_registry().create_target(language, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)
