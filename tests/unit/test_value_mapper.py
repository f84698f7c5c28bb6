"""Unit tests for ValueMapper."""

import pytest

from xml_data_extractor.exceptions import UnknownMapper
from xml_data_extractor.mapping.value_mapper import ValueMapper
from xml_data_extractor.models import MapperDefinition


@pytest.fixture
def value_mapper():
    return ValueMapper({
        "genres": MapperDefinition("genres", default="unknown",
                                   options={"ADV": "adventure", "FIC": "fiction", "SCI": "fiction"}),
        "flags": MapperDefinition("flags", default=False, options={"1": True}),
    })


def test_maps_known_raw_value(value_mapper):
    assert value_mapper.map("genres", "ADV") == "adventure"


def test_several_raw_values_can_share_an_output(value_mapper):
    assert value_mapper.map("genres", "FIC") == "fiction"
    assert value_mapper.map("genres", "SCI") == "fiction"


def test_unmatched_value_gets_default(value_mapper):
    assert value_mapper.map("genres", "DOC") == "unknown"
    assert value_mapper.map("genres", "") == "unknown"


def test_matching_is_case_sensitive(value_mapper):
    assert value_mapper.map("genres", "adv") == "unknown"


def test_non_string_values_compare_by_text(value_mapper):
    assert value_mapper.map("flags", 1) is True
    assert value_mapper.map("flags", 0) is False


def test_unknown_mapper_name(value_mapper):
    with pytest.raises(UnknownMapper) as exc_info:
        value_mapper.map("ratings", "PG")
    assert exc_info.value.mapper_name == "ratings"


def test_mapper_without_default_yields_none():
    mapper = ValueMapper({"m": MapperDefinition("m", options={"a": "b"})})
    assert mapper.map("m", "z") is None
