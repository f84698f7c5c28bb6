"""
Abstract interfaces and base classes for the XML data extraction system.

This module defines the contracts that system components implement so that
parsers, modifier providers and processors can be swapped or mocked in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .models import ExtractionSchema, ProcessingResult


class XMLParserInterface(ABC):
    """Abstract interface for XML parsing components."""

    @abstractmethod
    def parse_xml_stream(self, xml_content: str, source_record_id: str = None) -> Any:
        """
        Parse XML content into an element tree.

        Args:
            xml_content: Raw XML content as string
            source_record_id: Optional identifier used in log and error messages

        Returns:
            Parsed XML element tree root

        Raises:
            XMLParsingError: If XML is malformed or cannot be parsed
        """
        pass

    @abstractmethod
    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Validate XML structure before processing.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if XML is well-formed, False otherwise
        """
        pass


class ModifierProviderInterface(ABC):
    """
    Capability interface for caller-supplied modifiers.

    Any custom modifier is a named callable invoked with the extracted value
    (or values) first and the declared params after it.
    """

    @abstractmethod
    def has_modifier(self, name: str) -> bool:
        """Return True if this provider can invoke a modifier called ``name``."""
        pass

    @abstractmethod
    def invoke(self, name: str, values: Sequence[Any], params: Sequence[Any]) -> Any:
        """
        Invoke a modifier.

        Args:
            name: Modifier name
            values: Extracted value(s), passed as leading positional arguments
            params: Declared params, appended after the values

        Returns:
            Transformed value

        Raises:
            UnknownModifier: If the provider has no modifier called ``name``
        """
        pass


class DataExtractorInterface(ABC):
    """Abstract interface for schema-driven extraction components."""

    @abstractmethod
    def extract(self, document_root: Any, schema: ExtractionSchema) -> Dict[str, Any]:
        """
        Apply an extraction schema to a parsed document.

        Args:
            document_root: Root element of the parsed document
            schema: Extraction schema describing the output shape

        Returns:
            Dictionary with collection names as keys
        """
        pass


class ConfigurationManagerInterface(ABC):
    """Abstract interface for configuration management components."""

    @abstractmethod
    def load_schema(self, schema_path: Optional[str] = None) -> ExtractionSchema:
        """
        Load an extraction schema from file.

        Args:
            schema_path: Path to a YAML or JSON schema file

        Returns:
            Loaded extraction schema
        """
        pass


class BatchProcessorInterface(ABC):
    """Abstract interface for processing several documents with one schema."""

    @abstractmethod
    def process_documents(self, documents: List[Tuple[str, str]]) -> ProcessingResult:
        """
        Extract every document, isolating failures per document.

        Args:
            documents: List of (document_id, xml_content) tuples

        Returns:
            ProcessingResult with per-document outputs and failures
        """
        pass
