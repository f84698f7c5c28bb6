"""XML parsing and path resolution components."""

from .xml_parser import XMLParser
from .path_resolver import PathResolver, element_text

__all__ = ['XMLParser', 'PathResolver', 'element_text']
