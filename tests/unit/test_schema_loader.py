"""
Unit tests for SchemaLoader: field-shape recognition, mapper inversion and
rejection of malformed schema documents.
"""

import unittest

import pytest
import yaml

from xml_data_extractor.config.schema_loader import SchemaLoader, build_schema
from xml_data_extractor.exceptions import (
    MalformedFieldSpec,
    MissingModifier,
    SchemaDefinitionError,
)
from xml_data_extractor.models import (
    FullField,
    ModifierRef,
    NestedField,
    Path,
    ShorthandField,
)


@pytest.fixture
def loader():
    return SchemaLoader()


class TestFieldShapes:

    def test_string_is_shorthand(self, loader):
        spec = loader.build_field("movie/title", "title")
        assert spec == ShorthandField(Path(("movie", "title")))

    def test_mapping_with_path_is_full_field(self, loader):
        spec = loader.build_field({"path": "year", "modifier": "to_i"}, "year")
        assert isinstance(spec, FullField)
        assert spec.paths == (Path(("year",)),)
        assert spec.modifiers == (ModifierRef("to_i"),)
        assert spec.mapper is None
        assert not spec.multi_path

    def test_full_field_with_mapper_only(self, loader):
        spec = loader.build_field({"path": "main_gen", "mapper": "genres"}, "genre")
        assert spec.modifiers == ()
        assert spec.mapper == "genres"

    def test_list_of_paths_with_modifier(self, loader):
        spec = loader.build_field(
            {"path": ["firstname", "surname"], "modifier": {"name": "join", "params": [" "]}}, "name"
        )
        assert spec.multi_path
        assert [str(p) for p in spec.paths] == ["firstname", "surname"]
        assert spec.modifiers == (ModifierRef("join", (" ",)),)

    def test_list_of_paths_without_modifier_is_rejected(self, loader):
        with pytest.raises(MissingModifier) as exc_info:
            loader.build_field({"path": ["firstname", "surname"]}, "name")
        assert exc_info.value.field_name == "name"

    def test_array_of_is_repeated_nested_field(self, loader):
        spec = loader.build_field({"array_of": "actors/actor", "name": "firstname"}, "cast")
        assert isinstance(spec, NestedField)
        assert spec.collection.is_repeated
        assert str(spec.collection.array_of) == "actors/actor"
        assert list(spec.collection.fields) == ["name"]

    def test_other_mapping_is_singular_nested_field(self, loader):
        spec = loader.build_field({"city": "address/city", "zip": "address/zip"}, "location")
        assert isinstance(spec, NestedField)
        assert not spec.collection.is_repeated
        assert spec.collection.within is None

    def test_singular_nested_field_with_within(self, loader):
        spec = loader.build_field({"within": "address", "city": "city"}, "location")
        assert str(spec.collection.within) == "address"
        assert list(spec.collection.fields) == ["city"]

    def test_modifier_chain(self, loader):
        spec = loader.build_field(
            {"path": "title", "modifier": ["strip", {"name": "default_if_blank", "params": "n/a"}, "upcase"]}
        )
        assert spec.modifiers == (
            ModifierRef("strip"),
            ModifierRef("default_if_blank", ("n/a",)),
            ModifierRef("upcase"),
        )

    @pytest.mark.parametrize("data", [
        42,
        None,
        {},
        ["a", "b"],
        {"path": "a", "unexpected": 1},
        {"array_of": "a/b", "mapper": "genres", "x": "y"},
        {"array_of": "a/b", "path": "c"},
        {"mapper": "genres"},
        {"modifier": "to_i", "x": "y"},
        {"path": "a", "modifier": 5},
        {"path": "a", "modifier": {"name": "to_i", "extra": 1}},
        {"path": "a", "modifier": {"params": [1]}},
        {"path": "a", "mapper": ""},
    ])
    def test_malformed_field_specs(self, loader, data):
        with pytest.raises(MalformedFieldSpec):
            loader.build_field(data, "field")

    def test_array_of_and_within_together_is_rejected(self, loader):
        with pytest.raises(MalformedFieldSpec):
            loader.build_field({"array_of": "a/b", "within": "c", "x": "y"})

    def test_collection_without_fields_is_rejected(self, loader):
        with pytest.raises(MalformedFieldSpec):
            loader.build_field({"array_of": "a/b"})

    @pytest.mark.parametrize("path", ["@id", "ns:tag", "a[1]", "a//b", "  "])
    def test_invalid_paths_are_rejected_at_build_time(self, loader, path):
        with pytest.raises(MalformedFieldSpec):
            loader.build_field(path)


class TestMapperLoading(unittest.TestCase):

    def setUp(self):
        self.loader = SchemaLoader()

    def test_options_are_inverted(self):
        mapper = self.loader.build_mapper("genres", {
            "default": "unknown",
            "options": {"fiction": "FIC", "adventure": "ADV"},
        })
        self.assertEqual(mapper.default, "unknown")
        self.assertEqual(mapper.options, {"FIC": "fiction", "ADV": "adventure"})

    def test_list_of_raw_values(self):
        mapper = self.loader.build_mapper("genres", {"options": {"fiction": ["FIC", "SCI"]}})
        self.assertEqual(mapper.options, {"FIC": "fiction", "SCI": "fiction"})
        self.assertIsNone(mapper.default)

    def test_raw_values_are_compared_as_text(self):
        mapper = self.loader.build_mapper("flags", {"options": {"yes": 1}})
        self.assertEqual(mapper.options, {"1": "yes"})

    def test_duplicate_raw_value_is_rejected(self):
        with self.assertRaises(SchemaDefinitionError):
            self.loader.build_mapper("genres", {"options": {"fiction": "X", "adventure": ["ADV", "X"]}})

    def test_unknown_mapper_keys_are_rejected(self):
        with self.assertRaises(SchemaDefinitionError):
            self.loader.build_mapper("genres", {"default": "x", "fallback": "y"})

    def test_mapper_must_be_mapping(self):
        with self.assertRaises(SchemaDefinitionError):
            self.loader.build_mapper("genres", ["ADV"])

    def test_unquoted_yaml_boolean_raw_value_warns(self):
        definition = yaml.safe_load("options: {enabled: yes}")
        with self.assertLogs("xml_data_extractor.config.schema_loader", level="WARNING") as captured:
            mapper = self.loader.build_mapper("flags", definition)
        self.assertEqual(mapper.options, {"True": "enabled"})
        self.assertIn("Quote the value", captured.output[0])

    def test_quoted_yaml_raw_value_matches_literally(self):
        definition = yaml.safe_load("options: {enabled: 'yes'}")
        mapper = self.loader.build_mapper("flags", definition)
        self.assertEqual(mapper.options, {"yes": "enabled"})


class TestSchemaDocument:

    def test_reference_schema(self, movies_schema_data):
        schema = build_schema(movies_schema_data)
        assert list(schema.collections) == ["movies"]
        movies = schema.collections["movies"]
        assert str(movies.array_of) == "movies_list/movie"
        assert list(movies.fields) == ["title", "year", "duration", "genre", "cast"]
        assert isinstance(movies.fields["cast"], NestedField)
        assert schema.mappers["genres"].options == {"FIC": "fiction", "ADV": "adventure"}

    def test_mappers_section_is_optional(self, loader):
        schema = loader.build({"schemas": {"doc": {"title": "title"}}})
        assert schema.mappers == {}
        assert not schema.collections["doc"].is_repeated

    @pytest.mark.parametrize("data", [
        [],
        {},
        {"schemas": {}},
        {"schemas": "movies"},
        {"mappers": {}},
        {"schemas": {"doc": {"title": "title"}}, "extra": {}},
        {"schemas": {"doc": {"title": "title"}}, "mappers": ["genres"]},
    ])
    def test_unrecognized_documents(self, loader, data):
        with pytest.raises(SchemaDefinitionError):
            loader.build(data)

    def test_empty_collection_is_rejected(self, loader):
        with pytest.raises(MalformedFieldSpec):
            loader.build({"schemas": {"movies": {}}})

    def test_errors_carry_collection_and_field(self, loader):
        with pytest.raises(MalformedFieldSpec) as exc_info:
            loader.build({"schemas": {"movies": {"array_of": "list/movie", "title": 7}}})
        error = exc_info.value
        assert error.collection_name == "movies"
        assert error.field_name == "title"
        assert "collection=movies" in str(error)

    def test_innermost_field_name_is_kept(self, loader):
        with pytest.raises(MissingModifier) as exc_info:
            loader.build({"schemas": {"movies": {
                "array_of": "list/movie",
                "cast": {"array_of": "actors/actor", "name": {"path": ["a", "b"]}},
            }}})
        assert exc_info.value.field_name == "name"

    def test_custom_section_names(self):
        loader = SchemaLoader(schemas_section="collections", mappers_section="lookups")
        schema = loader.build({
            "collections": {"doc": {"kind": {"path": "k", "mapper": "kinds"}}},
            "lookups": {"kinds": {"default": "other", "options": {"a": "A"}}},
        })
        assert "kinds" in schema.mappers
