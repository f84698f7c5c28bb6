"""
Centralized configuration management for the XML data extraction system.

This module provides the ConfigManager class that serves as the single source
of truth for runtime settings (schema location, log level, output formatting)
and for loading extraction schemas from YAML or JSON files.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, field

import yaml

from ..interfaces import ConfigurationManagerInterface
from ..models import ExtractionSchema
from ..exceptions import ConfigurationError
from .processing_defaults import ExtractionDefaults
from .schema_loader import SchemaLoader


_VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class ExtractorSettings:
    """Runtime settings with environment variable support."""
    base_config_path: Path = field(default_factory=lambda: Path.cwd())
    schema_path: Optional[str] = None
    log_level: str = ExtractionDefaults.LOG_LEVEL
    json_indent: int = ExtractionDefaults.JSON_INDENT

    @classmethod
    def from_environment(cls, base_path: Optional[Union[str, Path]] = None) -> 'ExtractorSettings':
        """Create settings from environment variables."""
        if base_path:
            base_config_path = Path(base_path)
        else:
            base_config_path = Path(os.environ.get('XML_DATA_EXTRACTOR_CONFIG_PATH', Path.cwd()))

        raw_indent = os.environ.get('XML_DATA_EXTRACTOR_JSON_INDENT', str(cls.json_indent))
        try:
            json_indent = int(raw_indent)
        except ValueError:
            raise ConfigurationError(f"XML_DATA_EXTRACTOR_JSON_INDENT must be an integer, got '{raw_indent}'")

        return cls(
            base_config_path=base_config_path,
            schema_path=os.environ.get('XML_DATA_EXTRACTOR_SCHEMA_PATH'),
            log_level=os.environ.get('XML_DATA_EXTRACTOR_LOG_LEVEL', cls.log_level).upper(),
            json_indent=json_indent
        )


class ConfigManager(ConfigurationManagerInterface):
    """
    Centralized configuration manager serving as single source of truth.

    This class consolidates:
    - Environment-driven runtime settings
    - Schema file loading (YAML via PyYAML, JSON via the json module)
    - Schema building and caching
    """

    def __init__(self, base_config_path: Optional[Union[str, Path]] = None,
                 schema_loader: Optional[SchemaLoader] = None):
        """
        Initialize the centralized configuration manager.

        Args:
            base_config_path: Base path relative schema paths are resolved against.
                              If None, uses XML_DATA_EXTRACTOR_CONFIG_PATH or the current directory.
            schema_loader: Loader used to build schemas; defaults to SchemaLoader()
        """
        self.logger = logging.getLogger(__name__)

        self.settings = ExtractorSettings.from_environment(base_config_path)
        self.schema_loader = schema_loader or SchemaLoader()

        # Cache for loaded schemas
        self._schema_cache: Dict[str, ExtractionSchema] = {}

        self.logger.info(f"ConfigManager initialized with base path: {self.settings.base_config_path}")

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve a possibly relative path against the base configuration path."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.settings.base_config_path / path

    def read_schema_document(self, schema_path: Union[str, Path]) -> Any:
        """
        Read and deserialize a schema file without building it.

        Raises:
            ConfigurationError: If the file is missing, unreadable, of an
                unsupported format, or not valid YAML/JSON
        """
        full_path = self.resolve_path(schema_path)

        if not full_path.exists():
            raise ConfigurationError(f"Schema file not found: {full_path}")

        suffix = full_path.suffix.lower()
        if suffix not in ExtractionDefaults.SCHEMA_FILE_SUFFIXES:
            raise ConfigurationError(f"Unsupported file format: {full_path.suffix}")

        try:
            with open(full_path, 'r', encoding='utf-8') as file:
                if suffix in ('.yaml', '.yml'):
                    return yaml.safe_load(file)
                return json.load(file)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to parse schema file {full_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read schema file {full_path}: {e}")

    def load_schema(self, schema_path: Optional[Union[str, Path]] = None) -> ExtractionSchema:
        """
        Load, build and cache an extraction schema.

        Args:
            schema_path: Optional path to the schema file. If None, uses XML_DATA_EXTRACTOR_SCHEMA_PATH.

        Returns:
            Built ExtractionSchema

        Raises:
            ConfigurationError: If no path is configured or the file cannot be read
            SchemaDefinitionError: If the schema document has an unrecognized shape
        """
        if schema_path is None:
            schema_path = self.settings.schema_path
        if not schema_path:
            raise ConfigurationError("No schema path given and XML_DATA_EXTRACTOR_SCHEMA_PATH is not set")

        cache_key = str(self.resolve_path(schema_path))
        if cache_key in self._schema_cache:
            self.logger.debug(f"Returning cached schema for {cache_key}")
            return self._schema_cache[cache_key]

        schema = self.schema_loader.build(self.read_schema_document(schema_path))

        self._schema_cache[cache_key] = schema
        self.logger.info(f"Loaded extraction schema from {schema_path}")
        return schema

    def validate_configuration(self) -> bool:
        """
        Validate all configuration settings.

        Returns:
            True if all configurations are valid

        Raises:
            ConfigurationError: If any configuration is invalid
        """
        errors = []

        if not self.settings.base_config_path.exists():
            errors.append(f"Base configuration path does not exist: {self.settings.base_config_path}")

        if self.settings.schema_path and not self.resolve_path(self.settings.schema_path).exists():
            errors.append(f"Schema file does not exist: {self.resolve_path(self.settings.schema_path)}")

        if self.settings.log_level not in _VALID_LOG_LEVELS:
            errors.append(f"Invalid log level: {self.settings.log_level}")

        if self.settings.json_indent < 0:
            errors.append("JSON indent cannot be negative")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        self.logger.info("Configuration validation passed")
        return True

    def get_configuration_summary(self) -> Dict[str, Any]:
        """
        Get a summary of all configuration settings.

        Returns:
            Dictionary containing configuration summary
        """
        return {
            'paths': {
                'base_config_path': str(self.settings.base_config_path),
                'schema_path': self.settings.schema_path
            },
            'output': {
                'json_indent': self.settings.json_indent
            },
            'logging': {
                'log_level': self.settings.log_level
            },
            'cached_schemas': sorted(self._schema_cache)
        }

    def clear_cache(self) -> None:
        """Clear all cached schemas."""
        self._schema_cache.clear()

        self.logger.info("Configuration cache cleared")

    def reload_configuration(self) -> None:
        """Reload settings from environment variables and clear cache."""
        self.settings = ExtractorSettings.from_environment(self.settings.base_config_path)
        self.clear_cache()

        self.logger.info("Configuration reloaded from environment variables")


# Global configuration manager instance
_global_config_manager: Optional[ConfigManager] = None


def get_config_manager(base_config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        base_config_path: Base path for configuration files. Only used on first call.

    Returns:
        Global ConfigManager instance
    """
    global _global_config_manager

    if _global_config_manager is None:
        _global_config_manager = ConfigManager(base_config_path)

    return _global_config_manager


def reset_config_manager() -> None:
    """Reset the global configuration manager instance."""
    global _global_config_manager
    _global_config_manager = None
