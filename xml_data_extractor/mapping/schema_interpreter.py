"""
Schema Interpreter - Schema-Driven XML to Nested Data Extraction

This module is the orchestration layer of the extraction engine. It walks the
top-level collections of an ExtractionSchema in declaration order and, for
each one, either emits a list of records (repeated collections, ``array_of``)
or a single record (singular collections). Every field is handed to the
FieldInterpreter, which recurses back into this module for nested collections,
so repeated structures can nest to any depth (cast members inside a movie,
for instance).

Processing Contract:
- Output keys follow the order fields are declared in
- Repeated collections yield one record per matched node, in document order;
  zero matches yield an empty list
- Nested collections are anchored at the enclosing record's node
- No caching: each collection and each repetition is evaluated independently
- Fail fast: the first error aborts the document, annotated with the
  collection name, field name and path that raised it

Integration Points:
- SchemaLoader: builds the ExtractionSchema from YAML/JSON data
- XMLParser: turns XML text into the element tree this module walks
- TransformRegistry / ValueMapper: modifiers and mappers used by fields
- SequentialExtractor: runs one XmlDataExtractor over many documents
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from ..config.schema_loader import SchemaLoader
from ..exceptions import XMLExtractionError
from ..interfaces import DataExtractorInterface
from ..models import CollectionSpec, ExtractionSchema
from ..parsing.path_resolver import PathResolver
from ..parsing.xml_parser import XMLParser
from .field_interpreter import FieldInterpreter
from .modifiers import TransformRegistry
from .value_mapper import ValueMapper


class _Evaluation:
    """Per-document evaluation context; never shared between documents."""

    def __init__(self, interpreter: 'SchemaInterpreter', schema: ExtractionSchema):
        self.logger = interpreter.logger
        self.resolver = interpreter.resolver
        self.fields = FieldInterpreter(
            interpreter.resolver,
            interpreter.registry,
            ValueMapper(schema.mappers),
            self.evaluate_collection
        )

    def evaluate_collection(self, node: Any, spec: CollectionSpec,
                            collection_name: Optional[str] = None) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        if spec.is_repeated:
            try:
                matches = self.resolver.resolve_nodes(node, spec.array_of)
            except XMLExtractionError as e:
                raise e.add_context(collection_name=collection_name, path=str(spec.array_of))

            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"Collection '{collection_name}': {len(matches)} node(s) at '{spec.array_of}'")
            return [self.evaluate_record(match, spec, collection_name) for match in matches]

        anchor = node
        if spec.within is not None:
            try:
                anchor = self.resolver.resolve_node(node, spec.within)
            except XMLExtractionError as e:
                raise e.add_context(collection_name=collection_name, path=str(spec.within))
        return self.evaluate_record(anchor, spec, collection_name)

    def evaluate_record(self, node: Any, spec: CollectionSpec,
                        collection_name: Optional[str] = None) -> Dict[str, Any]:
        record = {}
        for field_name, field_spec in spec.fields.items():
            try:
                record[field_name] = self.fields.evaluate(node, field_spec, field_name)
            except XMLExtractionError as e:
                raise e.add_context(collection_name=collection_name, field_name=field_name)
        return record


class SchemaInterpreter(DataExtractorInterface):
    """
    Interprets an ExtractionSchema against a parsed document.

    The interpreter itself only holds the path resolver and the modifier
    registry, both read-only after construction. Everything that depends on the
    schema or the document lives in a per-call evaluation context, so a single
    interpreter can serve independent documents, one after another or from
    separate callers.
    """

    def __init__(self, modifiers: Any = None, registry: Optional[TransformRegistry] = None):
        """
        Args:
            modifiers: Capability object (or mapping of name -> callable) for custom modifiers
            registry: Preconfigured TransformRegistry; takes precedence over ``modifiers``
        """
        self.logger = logging.getLogger(__name__)
        self.resolver = PathResolver()
        self.registry = registry or TransformRegistry(modifiers)

    def extract(self, document_root: Any, schema: ExtractionSchema) -> Dict[str, Any]:
        """
        Apply ``schema`` to the tree rooted at ``document_root``.

        Returns:
            Collection name -> list of records (repeated) or record (singular)

        Raises:
            XMLExtractionError: Any resolution, modifier or mapper failure; no partial output
        """
        evaluation = _Evaluation(self, schema)
        output = {}
        for collection_name, spec in schema.collections.items():
            output[collection_name] = evaluation.evaluate_collection(document_root, spec, collection_name)

        self.logger.debug(f"Extracted {len(output)} collection(s) from <{getattr(document_root, 'tag', '?')}>")
        return output


def extract(document_root: Any, schema: ExtractionSchema, modifiers: Any = None) -> Dict[str, Any]:
    """Apply ``schema`` to ``document_root`` with an optional capability object."""
    return SchemaInterpreter(modifiers).extract(document_root, schema)


class XmlDataExtractor:
    """
    Convenience facade: schema + capability object in, nested data out.

    Example:
        extractor = XmlDataExtractor(yaml.safe_load(schema_text), CustomModifiers())
        data = extractor.parse(xml_text)
    """

    def __init__(self, schema: Union[ExtractionSchema, Mapping[str, Any]], modifiers: Any = None,
                 parser: Optional[XMLParser] = None):
        """
        Args:
            schema: ExtractionSchema, or the deserialized mapping with mappers/schemas sections
            modifiers: Capability object (or mapping) providing custom modifiers
            parser: XML parser to use for ``parse``; defaults to a strict XMLParser
        """
        self.logger = logging.getLogger(__name__)
        if isinstance(schema, ExtractionSchema):
            self.schema = schema
        else:
            self.schema = SchemaLoader().build(schema)
        self.parser = parser or XMLParser()
        self.interpreter = SchemaInterpreter(modifiers)

    def parse(self, xml_content: str, source_record_id: str = None) -> Dict[str, Any]:
        """
        Parse XML text and extract it.

        Raises:
            XMLParsingError: If the XML is empty or malformed
            XMLExtractionError: Any extraction failure
        """
        root = self.parser.parse_xml_stream(xml_content, source_record_id)
        try:
            return self.extract(root)
        except XMLExtractionError as e:
            if e.source_record_id is None:
                e.source_record_id = source_record_id
            raise

    def extract(self, document_root: Any) -> Dict[str, Any]:
        return self.interpreter.extract(document_root, self.schema)
