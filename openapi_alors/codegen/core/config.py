"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing per-target defaults and validation.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class TargetConfig:
    """Configuration for a target backend."""

    # Output settings
    output_file: Optional[str] = None
    emit_debug_dump: bool = False

    # Code style settings
    indent_size: int = 4
    add_comments: bool = True

    # Abort the whole run on a malformed operation instead of skipping it
    strict: bool = False

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "custom"}
        data.update(self.custom)
        return data


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["ecmascript"] = {
            "output_file": "Generated.js",
            "emit_debug_dump": False,
            "indent_size": 2,
            "add_comments": True,
        }

        self._configs["rust"] = {
            "output_file": "generated.rs",
            "emit_debug_dump": True,
            "indent_size": 4,
            "add_comments": True,
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> TargetConfig:
        """
        Get complete configuration for a target.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        # Start with defaults
        base_config = dict(self._configs.get((language or "").lower(), {}))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> TargetConfig:
        """Convert dictionary to TargetConfig instance."""
        known_fields = {f.name for f in fields(TargetConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return TargetConfig(**config_args)

    def save_config(self, config: TargetConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def list_languages(self) -> List[str]:
        """Get list of targets with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: TargetConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.output_file is not None and (
            not config.output_file or Path(config.output_file).name != config.output_file
        ):
            warnings.append(f"output_file must be a bare file name: {config.output_file}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> TargetConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
