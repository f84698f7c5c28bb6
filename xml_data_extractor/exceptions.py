"""
Custom exceptions for the XML data extraction system.

This module defines specific exception types for the error conditions that can
occur while loading a schema, parsing XML and interpreting a schema against an
element tree. Every error aborts extraction of the current document.
"""

from typing import Any, Optional


class XMLExtractionError(Exception):
    """Base exception for all XML extraction related errors."""

    def __init__(self, message: str, source_record_id: str = None):
        """
        Initialize XML extraction error.

        Args:
            message: Error description
            source_record_id: Optional identifier of the source document that caused the error
        """
        super().__init__(message)
        self.message = message
        self.source_record_id = source_record_id
        self.collection_name: Optional[str] = None
        self.field_name: Optional[str] = None
        self.path: Optional[str] = None

    def add_context(self, collection_name: str = None, field_name: str = None,
                    path: str = None) -> 'XMLExtractionError':
        """
        Attach schema location to the error while it propagates.

        Values already present are kept, so the innermost (most specific)
        location wins when nested collections re-raise the same error.
        """
        if collection_name and self.collection_name is None:
            self.collection_name = collection_name
        if field_name and self.field_name is None:
            self.field_name = field_name
        if path and self.path is None:
            self.path = path
        return self

    def __str__(self) -> str:
        location = []
        if self.collection_name:
            location.append(f"collection={self.collection_name}")
        if self.field_name:
            location.append(f"field={self.field_name}")
        if self.path:
            location.append(f"path={self.path}")
        if self.source_record_id:
            location.append(f"document={self.source_record_id}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class XMLParsingError(XMLExtractionError):
    """Exception raised when XML parsing fails."""

    def __init__(self, message: str, xml_content: str = None, source_record_id: str = None):
        """
        Initialize XML parsing error.

        Args:
            message: Error description
            xml_content: Optional XML content that failed to parse (truncated for logging)
            source_record_id: Optional identifier of the source document
        """
        super().__init__(message, source_record_id)
        # Store truncated XML content for debugging (first 500 chars)
        self.xml_content = xml_content[:500] + "..." if xml_content and len(xml_content) > 500 else xml_content


class ConfigurationError(XMLExtractionError):
    """Exception raised when configuration is invalid or missing."""
    pass


class SchemaDefinitionError(ConfigurationError):
    """Exception raised when a schema document has an unrecognized shape."""
    pass


class MalformedFieldSpec(SchemaDefinitionError):
    """Exception raised when a field spec matches none of the recognized variants."""

    def __init__(self, message: str, field_name: str = None):
        super().__init__(message)
        self.field_name = field_name


class MissingModifier(SchemaDefinitionError):
    """Exception raised when a list-of-paths field spec declares no modifier."""

    def __init__(self, field_name: str = None):
        super().__init__("A field with a list of paths requires a modifier to combine the values")
        self.field_name = field_name


class PathNotFound(XMLExtractionError):
    """Exception raised when a path segment has no matching child element."""

    def __init__(self, path: str, segment: str):
        """
        Initialize path resolution error.

        Args:
            path: The full slash-delimited path being resolved
            segment: The segment that had no matching child
        """
        super().__init__(f"No element matches segment '{segment}'")
        self.path = path
        self.segment = segment


class UnknownModifier(XMLExtractionError):
    """Exception raised when a modifier name is neither built in nor provided by the caller."""

    def __init__(self, modifier_name: str):
        super().__init__(f"Unknown modifier '{modifier_name}'")
        self.modifier_name = modifier_name


class UnknownMapper(XMLExtractionError):
    """Exception raised when a mapper name is not declared in the schema."""

    def __init__(self, mapper_name: str):
        super().__init__(f"Unknown mapper '{mapper_name}'")
        self.mapper_name = mapper_name


class DataTransformationError(XMLExtractionError):
    """Exception raised when a modifier fails on a value."""

    def __init__(self, message: str, modifier_name: str = None, source_value: Any = None,
                 source_record_id: str = None):
        """
        Initialize data transformation error.

        Args:
            message: Error description
            modifier_name: Name of the modifier that failed
            source_value: Value the modifier was applied to
            source_record_id: Optional identifier of the source document
        """
        super().__init__(message, source_record_id)
        self.modifier_name = modifier_name
        self.source_value = source_value
