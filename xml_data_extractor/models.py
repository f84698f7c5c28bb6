"""
Core data models for the XML data extraction system.

This module defines the typed schema tree the interpreter runs over. The
loosely-typed mapping read from YAML/JSON is converted into these dataclasses
once, by the schema loader, so evaluation never re-inspects raw shapes.
"""

import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import MalformedFieldSpec, MissingModifier, SchemaDefinitionError


# Tag-name segments only: no attribute, namespace, predicate or wildcard syntax
_INVALID_SEGMENT = re.compile(r'[@:\[\]*()\s/]')


@dataclass(frozen=True)
class Path:
    """
    Slash-delimited descent through an element tree.

    Attributes:
        segments: Tag names in descent order; the last one names the element(s)
                  whose text or node set is extracted
    """
    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments:
            raise MalformedFieldSpec("path cannot be empty")
        for segment in self.segments:
            if not segment:
                raise MalformedFieldSpec(f"path '{self}' contains an empty segment")
            if segment in ('.', '..') or _INVALID_SEGMENT.search(segment):
                raise MalformedFieldSpec(f"path segment '{segment}' is not a plain tag name")

    @classmethod
    def parse(cls, raw: Any) -> 'Path':
        """Build a Path from its slash-delimited string form."""
        if not isinstance(raw, str) or not raw.strip():
            raise MalformedFieldSpec(f"path must be a non-empty string, got {raw!r}")
        return cls(tuple(raw.strip().strip('/').split('/')))

    @property
    def parent(self) -> Tuple[str, ...]:
        return self.segments[:-1]

    @property
    def terminal(self) -> str:
        return self.segments[-1]

    def __str__(self) -> str:
        return '/'.join(self.segments)


@dataclass(frozen=True)
class ModifierRef:
    """
    Reference to a named transformation.

    Attributes:
        name: Built-in or caller-supplied modifier name
        params: Extra positional arguments appended after the extracted value(s)
    """
    name: str
    params: Tuple[Any, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise MalformedFieldSpec(f"modifier name must be a non-empty string, got {self.name!r}")


@dataclass(frozen=True)
class MapperDefinition:
    """
    Value-remapping table with a default fallback.

    Attributes:
        name: Name the mapper is declared under
        default: Value returned when the raw value has no option
        options: Raw value (as string) -> mapped output value
    """
    name: str
    default: Any = None
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ShorthandField:
    """Bare path; the output is the trimmed text at that path."""
    path: Path


@dataclass(frozen=True)
class FullField:
    """
    Path with optional transformation chain and value mapper.

    Attributes:
        paths: One path, or several whose values are combined by the first modifier
        modifiers: Transformations applied in order (path -> modifiers -> mapper)
        mapper: Name of a mapper declared in the schema's mappers section
        multi_path: True when the field was declared with a list of paths
    """
    paths: Tuple[Path, ...]
    modifiers: Tuple[ModifierRef, ...] = ()
    mapper: Optional[str] = None
    multi_path: bool = False

    def __post_init__(self):
        if not self.paths:
            raise MalformedFieldSpec("path list cannot be empty")
        if self.multi_path and not self.modifiers:
            raise MissingModifier()
        if not self.multi_path and len(self.paths) != 1:
            raise MalformedFieldSpec("a single-path field must carry exactly one path")
        if self.mapper is not None and (not isinstance(self.mapper, str) or not self.mapper):
            raise MalformedFieldSpec(f"mapper must be a mapper name, got {self.mapper!r}")


@dataclass(frozen=True)
class CollectionSpec:
    """
    Schema fragment describing one object or a repeated sequence of objects.

    Attributes:
        fields: Output field name -> FieldSpec, in output order
        array_of: Path locating the repeated elements; None for a singular collection
        within: Optional descent applied before a singular collection's fields are evaluated
    """
    fields: Dict[str, 'FieldSpec']
    array_of: Optional[Path] = None
    within: Optional[Path] = None

    def __post_init__(self):
        if not self.fields:
            raise MalformedFieldSpec("a collection must declare at least one field")
        if self.array_of is not None and self.within is not None:
            raise MalformedFieldSpec("a collection cannot declare both array_of and within")

    @property
    def is_repeated(self) -> bool:
        return self.array_of is not None


@dataclass(frozen=True)
class NestedField:
    """Field whose value is itself a collection, evaluated relative to the current node."""
    collection: CollectionSpec


FieldSpec = Union[ShorthandField, FullField, NestedField]


@dataclass(frozen=True)
class ExtractionSchema:
    """
    Complete extraction schema: named top-level collections plus declared mappers.

    Attributes:
        collections: Output collection name -> CollectionSpec, in output order
        mappers: Mapper name -> MapperDefinition
    """
    collections: Dict[str, CollectionSpec]
    mappers: Dict[str, MapperDefinition] = field(default_factory=dict)

    def __post_init__(self):
        if not self.collections:
            raise SchemaDefinitionError("At least one collection must be specified")


@dataclass
class ProcessingResult:
    """
    Results from extracting a batch of documents.

    Attributes:
        records_processed: Total number of documents processed
        records_successful: Number of documents extracted without error
        records_failed: Number of documents whose extraction failed
        processing_time_seconds: Total processing time
        errors: Error messages encountered, one per failed document
        results: Document id -> extraction output for successful documents
        failed_items: Per-document failure records (document_id, error_stage, error)
    """
    records_processed: int = 0
    records_successful: int = 0
    records_failed: int = 0
    processing_time_seconds: float = 0.0
    errors: List[str] = None
    results: Dict[str, Any] = None
    failed_items: List[Dict[str, str]] = None
    start_time: float = field(default_factory=time.time)

    def __post_init__(self):
        """Initialize default values for mutable fields."""
        if self.errors is None:
            self.errors = []
        if self.results is None:
            self.results = {}
        if self.failed_items is None:
            self.failed_items = []

    @property
    def success_rate(self) -> float:
        """Calculate the success rate as a percentage."""
        if self.records_processed == 0:
            return 0.0
        return (self.records_successful / self.records_processed) * 100.0
