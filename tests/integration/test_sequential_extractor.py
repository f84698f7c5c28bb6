"""
Integration tests for batch extraction: schema file -> ConfigManager ->
XmlDataExtractor -> SequentialExtractor over several documents.
"""

import pytest

from xml_data_extractor.config.config_manager import ConfigManager
from xml_data_extractor.mapping.schema_interpreter import XmlDataExtractor
from xml_data_extractor.parsing.xml_parser import XMLParser
from xml_data_extractor.processing.sequential_extractor import SequentialExtractor


SECOND_MOVIE_XML = """\
<xml>
  <movies_list>
    <movie>
      <description>Alien</description>
      <total_minutes>117</total_minutes>
      <year>1979</year>
      <main_gen>HOR</main_gen>
      <actors/>
    </movie>
  </movies_list>
</xml>
"""

MISSING_YEAR_XML = """\
<xml>
  <movies_list>
    <movie>
      <description>Untitled</description>
      <total_minutes>90</total_minutes>
      <main_gen>FIC</main_gen>
      <actors/>
    </movie>
  </movies_list>
</xml>
"""


@pytest.fixture
def extractor(movies_schema_file, movie_modifiers):
    schema = ConfigManager(movies_schema_file.parent).load_schema(movies_schema_file.name)
    return XmlDataExtractor(schema, movie_modifiers)


def test_batch_with_mixed_outcomes(extractor, movies_xml, expected_movies):
    documents = [
        ("lotr.xml", movies_xml),
        ("alien.xml", SECOND_MOVIE_XML),
        ("broken.xml", "<xml><movies_list>"),
        ("untitled.xml", MISSING_YEAR_XML),
        ("empty.xml", ""),
    ]

    result = SequentialExtractor(extractor).process_documents(documents)

    assert result.records_processed == 5
    assert result.records_successful == 2
    assert result.records_failed == 3
    assert result.success_rate == pytest.approx(40.0)

    assert result.results["lotr.xml"] == expected_movies
    assert result.results["alien.xml"] == {"movies": [{
        "title": "Alien",
        "year": 1979,
        "duration": "1h 57min",
        "genre": "unknown",
        "cast": [],
    }]}
    assert set(result.results) == {"lotr.xml", "alien.xml"}

    stages = {item['document_id']: item['error_stage'] for item in result.failed_items}
    assert stages == {
        "broken.xml": "validation",
        "untitled.xml": "extraction",
        "empty.xml": "validation",
    }

    extraction_error = next(e for e in result.errors if e.startswith("untitled.xml"))
    assert "field=year" in extraction_error
    assert "document=untitled.xml" in extraction_error


def test_failure_does_not_affect_later_documents(extractor, movies_xml, expected_movies):
    documents = [("bad", MISSING_YEAR_XML), ("good", movies_xml)]
    result = SequentialExtractor(extractor).process_documents(documents)
    assert result.results == {"good": expected_movies}


def test_empty_batch(extractor):
    result = SequentialExtractor(extractor).process_documents([])
    assert result.records_processed == 0
    assert result.success_rate == 0.0
    assert result.results == {}


def test_recover_mode_parser_is_honoured_by_batch():
    extractor = XmlDataExtractor({"schemas": {"doc": {"a": "a"}}}, parser=XMLParser(recover=True))
    document = "<d><a>1</a><b></d>"

    result = SequentialExtractor(extractor).process_documents([("recoverable", document)])

    assert result.records_failed == 0
    assert result.failed_items == []
    assert result.results == {"recoverable": extractor.parse(document)}
    assert result.results["recoverable"] == {"doc": {"a": "1"}}


def test_strict_parser_rejects_same_document_at_validation():
    extractor = XmlDataExtractor({"schemas": {"doc": {"a": "a"}}})
    result = SequentialExtractor(extractor).process_documents([("strict", "<d><a>1</a><b></d>")])
    assert result.failed_items[0]['error_stage'] == "validation"
