"""Schema interpretation: modifiers, mappers, field and collection evaluation."""

from .modifiers import (
    BUILTIN_MODIFIERS,
    MappingModifierProvider,
    ObjectModifierProvider,
    TransformRegistry,
)
from .value_mapper import ValueMapper
from .field_interpreter import FieldInterpreter
from .schema_interpreter import SchemaInterpreter, XmlDataExtractor, extract

__all__ = [
    'BUILTIN_MODIFIERS',
    'MappingModifierProvider',
    'ObjectModifierProvider',
    'TransformRegistry',
    'ValueMapper',
    'FieldInterpreter',
    'SchemaInterpreter',
    'XmlDataExtractor',
    'extract',
]
