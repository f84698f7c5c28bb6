"""
XML parsing front end for schema-driven extraction.

This module turns raw XML text into an lxml element tree. Extraction itself
never touches markup; it only walks the tree this parser returns.
"""

import logging

from typing import Any, Dict

from lxml import etree

from ..interfaces import XMLParserInterface
from ..exceptions import XMLParsingError


class XMLParser(XMLParserInterface):
    """
    lxml-based parser producing the element tree the extraction engine walks.

    Features:
    - Cleans byte order marks and stray control characters before parsing
    - Secure parser settings (no entity resolution, no network access)
    - CDATA sections are kept as element text
    - Lightweight well-formedness validation without building a document
    - Detailed error logging with source record identification
    """

    def __init__(self, recover: bool = False):
        """
        Initialize XML parser.

        Args:
            recover: Let lxml attempt to recover from minor syntax errors instead of failing
        """
        self.recover = recover
        self.logger = logging.getLogger(__name__)

        # Performance tracking
        self.parse_count = 0
        self.validation_count = 0

    def _build_parser(self, recover: bool) -> etree.XMLParser:
        return etree.XMLParser(
            recover=recover,
            strip_cdata=False,  # CDATA content stays readable as text
            remove_comments=False,
            resolve_entities=False,  # Security: don't resolve external entities
            no_network=True  # Security: disable network access
        )

    def parse_xml_stream(self, xml_content: str, source_record_id: str = None) -> Any:
        """
        Parse XML content into an lxml element tree root.

        Args:
            xml_content: Raw XML content as string
            source_record_id: Optional identifier used in log and error messages

        Returns:
            Parsed XML element tree root

        Raises:
            XMLParsingError: If XML is empty, malformed or cannot be parsed
        """
        if not xml_content or not xml_content.strip():
            raise XMLParsingError("XML content is empty or None", source_record_id=source_record_id)

        self.parse_count += 1
        source_record_id = source_record_id or f"parse_{self.parse_count}"

        cleaned_xml = self._clean_xml_content(xml_content)

        try:
            root = etree.fromstring(cleaned_xml.encode('utf-8'), self._build_parser(self.recover))
        except etree.XMLSyntaxError as e:
            self.logger.error(f"XML syntax error: {e} (Record ID: {source_record_id})")
            raise XMLParsingError(f"XML syntax error: {e}", xml_content, source_record_id)

        if root is None:
            # recover=True can swallow everything and hand back no root at all
            raise XMLParsingError("XML content has no root element", xml_content, source_record_id)

        self.logger.debug(f"Parsed XML document with root <{root.tag}> (Record ID: {source_record_id})")
        return root

    def _clean_xml_content(self, xml_content: str) -> str:
        """
        Clean and normalize XML content for parsing.

        Args:
            xml_content: Raw XML content

        Returns:
            Cleaned XML content
        """
        # Remove BOM if present
        if xml_content.startswith('\ufeff'):
            xml_content = xml_content[1:]
            self.logger.debug("Removed UTF-8 BOM from XML content")

        # Handle BOM that might appear as visible characters (like ï»¿)
        if xml_content.startswith('ï»¿'):
            xml_content = xml_content[3:]
            self.logger.debug("Removed visible UTF-8 BOM characters from XML content")

        # Remove other common hidden characters at the beginning
        while xml_content and ord(xml_content[0]) < 32 and xml_content[0] not in '\t\n\r':
            xml_content = xml_content[1:]
            self.logger.debug("Removed hidden leading character")

        # lxml rejects unicode strings with an encoding declaration, so we always
        # hand it bytes; normalize line endings on the way
        xml_content = xml_content.replace('\r\n', '\n').replace('\r', '\n')

        return xml_content.strip()

    def validate_xml_structure(self, xml_content: str) -> bool:
        """
        Check that XML content is present and well-formed.

        Uses the same recover setting as parse_xml_stream, so a document this
        parser can recover from also passes validation.

        Args:
            xml_content: Raw XML content to validate

        Returns:
            True if XML is valid, False otherwise
        """
        if xml_content is None or not xml_content.strip():
            self.logger.warning("XML content is empty")
            return False

        self.validation_count += 1
        cleaned_xml = self._clean_xml_content(xml_content)

        if not (cleaned_xml.startswith('<') and cleaned_xml.endswith('>')):
            self.logger.warning("XML doesn't start with < or end with >")
            return False

        try:
            root = etree.fromstring(cleaned_xml.encode('utf-8'), self._build_parser(self.recover))
        except etree.XMLSyntaxError as e:
            self.logger.warning(f"XML well-formedness validation failed: {e}")
            return False

        if root is None:
            self.logger.warning("XML content has no recoverable root element")
            return False

        self.logger.debug(f"XML validation passed (validation #{self.validation_count})")
        return True

    def get_performance_stats(self) -> Dict[str, Any]:
        """
        Get parser statistics.

        Returns:
            Dictionary containing parse and validation counts
        """
        return {
            'parse_count': self.parse_count,
            'validation_count': self.validation_count,
            'recover': self.recover
        }

    def reset_stats(self) -> None:
        """Reset statistics."""
        self.parse_count = 0
        self.validation_count = 0

        self.logger.debug("XMLParser statistics reset")
