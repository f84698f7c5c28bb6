"""
Builds the typed schema model from deserialized configuration data.

The mapping read from YAML or JSON is loosely typed: a field may be a bare
string, a mapping with ``path``, or a nested collection. This module
recognizes each shape exactly once and rejects anything else, so the
interpreter only ever sees ShorthandField, FullField and NestedField.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import MalformedFieldSpec, MissingModifier, SchemaDefinitionError
from ..models import (
    CollectionSpec,
    ExtractionSchema,
    FieldSpec,
    FullField,
    MapperDefinition,
    ModifierRef,
    NestedField,
    Path,
    ShorthandField,
)
from .processing_defaults import ExtractionDefaults


FULL_FIELD_KEYS = {'path', 'modifier', 'mapper'}
COLLECTION_KEYS = {'array_of', 'within'}


class SchemaLoader:
    """
    Converts a deserialized schema document into an ExtractionSchema.

    Expected document shape::

        mappers:
          genres: {default: unknown, options: {adventure: ADV}}
        schemas:
          movies:
            array_of: movies_list/movie
            title: description
            genre: {path: main_gen, mapper: genres}

    Mapper options are written output-first (``adventure: ADV`` maps the raw
    value ``ADV`` to ``adventure``); an output may list several raw values.
    """

    def __init__(self, schemas_section: str = ExtractionDefaults.SCHEMA_SECTION,
                 mappers_section: str = ExtractionDefaults.MAPPERS_SECTION):
        self.logger = logging.getLogger(__name__)
        self.schemas_section = schemas_section
        self.mappers_section = mappers_section

    def build(self, data: Mapping[str, Any]) -> ExtractionSchema:
        """
        Build an ExtractionSchema from a deserialized schema document.

        Raises:
            SchemaDefinitionError: If the document shape is not recognized
            MalformedFieldSpec: If a field spec matches no variant
            MissingModifier: If a list-of-paths field has no modifier
        """
        if not isinstance(data, Mapping):
            raise SchemaDefinitionError(f"Schema document must be a mapping, got {type(data).__name__}")

        unknown_sections = set(data) - {self.schemas_section, self.mappers_section}
        if unknown_sections:
            raise SchemaDefinitionError(f"Unknown schema sections: {sorted(map(str, unknown_sections))}")

        schemas_data = data.get(self.schemas_section)
        if not isinstance(schemas_data, Mapping) or not schemas_data:
            raise SchemaDefinitionError(f"Schema document needs a non-empty '{self.schemas_section}' section")

        mappers = self.build_mappers(data.get(self.mappers_section) or {})

        collections = {}
        for collection_name, collection_data in schemas_data.items():
            collections[str(collection_name)] = self._build_top_level_collection(str(collection_name), collection_data)

        schema = ExtractionSchema(collections=collections, mappers=mappers)
        self.logger.info(f"Built extraction schema with {len(collections)} collection(s) and {len(mappers)} mapper(s)")
        return schema

    def build_mappers(self, mappers_data: Mapping[str, Any]) -> Dict[str, MapperDefinition]:
        if not isinstance(mappers_data, Mapping):
            raise SchemaDefinitionError(f"'{self.mappers_section}' must be a mapping of mapper name to definition")
        return {str(name): self.build_mapper(str(name), definition) for name, definition in mappers_data.items()}

    def build_mapper(self, name: str, definition: Any) -> MapperDefinition:
        """
        Build one mapper, inverting its output-first option table to raw -> output.

        Raises:
            SchemaDefinitionError: If the definition is not a mapping, has unknown
                keys, or declares one raw value under two outputs
        """
        if not isinstance(definition, Mapping):
            raise SchemaDefinitionError(f"Mapper '{name}' must be a mapping with default/options")
        unknown = set(definition) - {'default', 'options'}
        if unknown:
            raise SchemaDefinitionError(f"Mapper '{name}' has unknown keys: {sorted(map(str, unknown))}")

        options_data = definition.get('options') or {}
        if not isinstance(options_data, Mapping):
            raise SchemaDefinitionError(f"Mapper '{name}' options must be a mapping")

        options = {}
        for output_value, raw_values in options_data.items():
            if not isinstance(raw_values, (list, tuple)):
                raw_values = [raw_values]
            for raw_value in raw_values:
                if isinstance(raw_value, bool):
                    # YAML 1.1 reads unquoted yes/no/on/off as booleans
                    self.logger.warning(
                        f"Mapper '{name}' option '{output_value}' has boolean raw value {raw_value}; "
                        f"it only matches the text '{raw_value}'. Quote the value in YAML to match it literally"
                    )
                key = str(raw_value)
                if key in options:
                    raise SchemaDefinitionError(
                        f"Mapper '{name}' declares raw value '{key}' for both "
                        f"'{options[key]}' and '{output_value}'"
                    )
                options[key] = output_value

        return MapperDefinition(name=name, default=definition.get('default'), options=options)

    def _build_top_level_collection(self, name: str, data: Any) -> CollectionSpec:
        if not isinstance(data, Mapping) or not data:
            raise MalformedFieldSpec(f"Collection '{name}' must be a non-empty mapping of fields", name)
        try:
            return self.build_collection(data)
        except SchemaDefinitionError as e:
            raise e.add_context(collection_name=name)

    def build_collection(self, data: Mapping[str, Any]) -> CollectionSpec:
        """Build a repeated (``array_of``) or singular collection from its mapping."""
        array_of = Path.parse(data['array_of']) if 'array_of' in data else None
        within = Path.parse(data['within']) if 'within' in data else None

        fields = {}
        for field_name, field_data in data.items():
            if field_name in COLLECTION_KEYS:
                continue
            try:
                fields[str(field_name)] = self.build_field(field_data, str(field_name))
            except SchemaDefinitionError as e:
                raise e.add_context(field_name=str(field_name))

        return CollectionSpec(fields=fields, array_of=array_of, within=within)

    def build_field(self, data: Any, field_name: str = None) -> FieldSpec:
        """
        Recognize one field spec.

        - string: ShorthandField
        - mapping with array_of: repeated NestedField
        - mapping with path: FullField
        - any other non-empty mapping: singular NestedField
        """
        if isinstance(data, str):
            return ShorthandField(Path.parse(data))

        if not isinstance(data, Mapping) or not data:
            raise MalformedFieldSpec(f"Unrecognized field spec {data!r}", field_name)

        keys = set(data)
        if 'array_of' in data:
            clashing = keys & FULL_FIELD_KEYS
            if clashing:
                raise MalformedFieldSpec(
                    f"A nested array field cannot also declare {sorted(clashing)}", field_name
                )
            return NestedField(self.build_collection(data))

        if 'path' in data:
            unknown = keys - FULL_FIELD_KEYS
            if unknown:
                raise MalformedFieldSpec(f"Unknown keys {sorted(map(str, unknown))} in field spec", field_name)
            return self._build_full_field(data, field_name)

        clashing = keys & {'mapper', 'modifier'}
        if clashing:
            raise MalformedFieldSpec(f"{sorted(clashing)} declared without a path", field_name)
        return NestedField(self.build_collection(data))

    def _build_full_field(self, data: Mapping[str, Any], field_name: str = None) -> FullField:
        raw_path = data['path']
        multi_path = isinstance(raw_path, (list, tuple))
        if multi_path:
            paths = tuple(Path.parse(p) for p in raw_path)
        else:
            paths = (Path.parse(raw_path),)

        modifiers = self.build_modifiers(data.get('modifier'))
        if multi_path and not modifiers:
            raise MissingModifier(field_name)

        return FullField(paths=paths, modifiers=modifiers, mapper=data.get('mapper'), multi_path=multi_path)

    def build_modifiers(self, data: Any) -> tuple:
        """
        Normalize the ``modifier`` key to a tuple of ModifierRef.

        Accepts a bare name, ``{name, params}``, or a list mixing both.
        """
        if data is None:
            return ()
        items: List[Any] = list(data) if isinstance(data, (list, tuple)) else [data]
        return tuple(self._build_modifier_ref(item) for item in items)

    def _build_modifier_ref(self, data: Any) -> ModifierRef:
        if isinstance(data, str):
            return ModifierRef(data)
        if isinstance(data, Mapping):
            unknown = set(data) - {'name', 'params'}
            if unknown:
                raise MalformedFieldSpec(f"Unknown keys {sorted(map(str, unknown))} in modifier")
            params = data.get('params') or []
            if not isinstance(params, (list, tuple)):
                params = [params]
            return ModifierRef(data.get('name'), tuple(params))
        raise MalformedFieldSpec(f"Unrecognized modifier {data!r}")


def build_schema(data: Mapping[str, Any], loader: Optional[SchemaLoader] = None) -> ExtractionSchema:
    """Build an ExtractionSchema from a deserialized schema document."""
    return (loader or SchemaLoader()).build(data)
