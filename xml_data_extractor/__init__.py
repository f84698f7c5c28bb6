"""
XML Data Extractor

A declarative, schema-driven tool for extracting structured data from XML
documents into nested dictionaries and lists ready for JSON serialization.
"""

__version__ = "1.0.0"

# Import core models and interfaces for easy access
from .models import (
    Path,
    ModifierRef,
    MapperDefinition,
    ShorthandField,
    FullField,
    NestedField,
    CollectionSpec,
    ExtractionSchema,
    ProcessingResult
)

from .interfaces import (
    XMLParserInterface,
    ModifierProviderInterface,
    DataExtractorInterface,
    ConfigurationManagerInterface,
    BatchProcessorInterface
)

from .exceptions import (
    XMLExtractionError,
    XMLParsingError,
    ConfigurationError,
    SchemaDefinitionError,
    MalformedFieldSpec,
    MissingModifier,
    PathNotFound,
    UnknownModifier,
    UnknownMapper,
    DataTransformationError
)

from .config.schema_loader import SchemaLoader, build_schema
from .mapping.schema_interpreter import SchemaInterpreter, XmlDataExtractor, extract

__all__ = [
    # Core models
    "Path",
    "ModifierRef",
    "MapperDefinition",
    "ShorthandField",
    "FullField",
    "NestedField",
    "CollectionSpec",
    "ExtractionSchema",
    "ProcessingResult",

    # Interfaces
    "XMLParserInterface",
    "ModifierProviderInterface",
    "DataExtractorInterface",
    "ConfigurationManagerInterface",
    "BatchProcessorInterface",

    # Exceptions
    "XMLExtractionError",
    "XMLParsingError",
    "ConfigurationError",
    "SchemaDefinitionError",
    "MalformedFieldSpec",
    "MissingModifier",
    "PathNotFound",
    "UnknownModifier",
    "UnknownMapper",
    "DataTransformationError",

    # Entry points
    "SchemaLoader",
    "build_schema",
    "SchemaInterpreter",
    "XmlDataExtractor",
    "extract"
]
