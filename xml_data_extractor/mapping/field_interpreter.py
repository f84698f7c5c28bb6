"""
Field interpretation: one Field Spec against one node, producing one output value.
"""

import logging
from typing import Any, Callable, Optional

from ..exceptions import MalformedFieldSpec
from ..models import CollectionSpec, FieldSpec, FullField, NestedField, ShorthandField
from ..parsing.path_resolver import PathResolver
from .modifiers import TransformRegistry
from .value_mapper import ValueMapper


CollectionEvaluator = Callable[[Any, CollectionSpec, Optional[str]], Any]


class FieldInterpreter:
    """
    Evaluates a single field spec.

    Dispatch by variant:
    - ShorthandField: trimmed text at the path
    - FullField: path -> modifiers (in order) -> mapper, each stage optional
    - NestedField: handed back to the collection evaluator, anchored at the current node

    For a list-of-paths FullField the first modifier receives every resolved
    value as a positional argument; later modifiers receive the previous result.
    """

    def __init__(self, resolver: PathResolver, registry: TransformRegistry,
                 value_mapper: ValueMapper, collection_evaluator: CollectionEvaluator):
        self.logger = logging.getLogger(__name__)
        self.resolver = resolver
        self.registry = registry
        self.value_mapper = value_mapper
        self.collection_evaluator = collection_evaluator

    def evaluate(self, node: Any, field_spec: FieldSpec, field_name: str = None) -> Any:
        """
        Produce the output value for ``field_spec`` evaluated at ``node``.

        Raises:
            PathNotFound, UnknownModifier, UnknownMapper, DataTransformationError
            MalformedFieldSpec: If ``field_spec`` is not a recognized variant
        """
        if isinstance(field_spec, ShorthandField):
            return self.resolver.resolve_text(node, field_spec.path)
        if isinstance(field_spec, FullField):
            return self._evaluate_full(node, field_spec)
        if isinstance(field_spec, NestedField):
            return self.collection_evaluator(node, field_spec.collection, field_name)
        raise MalformedFieldSpec(f"Unsupported field spec type {type(field_spec).__name__}", field_name)

    def _evaluate_full(self, node: Any, field_spec: FullField) -> Any:
        if field_spec.multi_path:
            values = self.resolver.resolve_texts(node, field_spec.paths)
        else:
            values = [self.resolver.resolve_text(node, field_spec.paths[0])]

        modifiers = field_spec.modifiers
        if modifiers:
            value = self.registry.apply(modifiers[0], *values)
            for ref in modifiers[1:]:
                value = self.registry.apply(ref, value)
        else:
            value = values[0]

        if field_spec.mapper is not None:
            value = self.value_mapper.map(field_spec.mapper, value)

        return value
