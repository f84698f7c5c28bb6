"""Configuration management components."""

from .config_manager import ConfigManager, ExtractorSettings, get_config_manager, reset_config_manager
from .processing_defaults import ExtractionDefaults
from .schema_loader import SchemaLoader, build_schema

__all__ = [
    'ConfigManager',
    'ExtractorSettings',
    'get_config_manager',
    'reset_config_manager',
    'ExtractionDefaults',
    'SchemaLoader',
    'build_schema',
]
