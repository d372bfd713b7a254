"""
Configuration management for type generation.

Handles loading and merging configuration from JSON files and the
environment, providing defaults and validation for generator settings.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional, Union, Mapping
from dataclasses import dataclass, field, fields, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DIRECTUS_URL = "http://localhost:8055"
DEFAULT_DIRECTUS_TOKEN = "admin"
DEFAULT_OUTPUT_FILE = str(Path(".") / "directus-schema.ts")

# Environment variable -> config field
ENV_VARS = {
    "DIRECTUS_URL": "directus_url",
    "DIRECTUS_TOKEN": "directus_token",
    "DIRECTUS_TYPEGEN_OUTPUT": "output_file",
}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for a generation run."""

    # Output settings
    output_file: Optional[str] = DEFAULT_OUTPUT_FILE

    # Metadata source
    directus_url: str = DEFAULT_DIRECTUS_URL
    directus_token: str = DEFAULT_DIRECTUS_TOKEN
    timeout: int = 30
    include_system_collections: bool = False

    # Code style settings
    schema_name: str = "Schema"
    indent_size: int = 4
    use_tabs: bool = True

    # Naming settings
    singularize_singletons: bool = False

    # Additional metadata
    add_comments: bool = True

    # Data type tag or kind name -> TypeScript type
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Unrecognized settings from config files
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """Indentation unit for member lines."""
        return "\t" if self.use_tabs else " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(
        self,
        custom_config: Optional[Mapping[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Precedence, lowest first: defaults, config file, environment,
        custom overrides.

        Args:
            custom_config: Explicit overrides (e.g. from CLI flags)
            config_file: Path to JSON configuration file
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Merged configuration
        """
        base_config: Dict[str, Any] = {}

        if config_file:
            base_config.update(self._load_config_file(config_file))

        base_config.update(self._load_environment(environ))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_environment(self, environ: Optional[Mapping[str, str]]) -> Dict[str, Any]:
        """Pick known variables out of the environment."""
        environ = os.environ if environ is None else environ
        values = {}
        for variable, key in ENV_VARS.items():
            if environ.get(variable):
                values[key] = environ[variable]
                logger.debug(f"Using {variable} from environment")
        return values

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.info(f"Loaded configuration from {path}")
        return config

    def _dict_to_config(self, config_dict: Mapping[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file.

        The token is never written.
        """
        path = Path(output_path)

        config_dict = asdict(config)
        config_dict.pop("directus_token", None)
        config_dict.update(config_dict.pop("custom"))

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.schema_name.isidentifier():
            warnings.append(f"Invalid schema_name: {config.schema_name}")

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.timeout <= 0:
            warnings.append(f"Invalid timeout: {config.timeout}")

        if not config.directus_url.startswith(("http://", "https://")):
            warnings.append(f"Directus URL has no http(s) scheme: {config.directus_url}")

        if config.output_file and not config.output_file.endswith(".ts"):
            warnings.append(f"Output file does not end in .ts: {config.output_file}")

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
    custom_config: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file, environ)

