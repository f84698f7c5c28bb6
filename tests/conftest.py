"""Shared fixtures: the movies reference document, its schema and custom modifiers."""

import pytest
import yaml
from lxml import etree


MOVIES_XML = """\
<xml>
  <movies_list>
    <movie>
      <description>The Lord of the Rings: The Fellowship of the Ring</description>
      <total_minutes>209</total_minutes>
      <year>2001</year>
      <main_gen>ADV</main_gen>
      <actors>
        <actor>
          <firstname>Orlando</firstname>
          <surname>Bloom</surname>
          <char_name>Legolas</char_name>
        </actor>
        <actor>
          <firstname>Ian</firstname>
          <surname>Mckellen</surname>
          <char_name>Gandalf</char_name>
        </actor>
      </actors>
    </movie>
  </movies_list>
</xml>
"""

MOVIES_SCHEMA_YAML = """\
mappers:
  genres:
    default: unknown
    options:
      fiction: FIC
      adventure: ADV
schemas:
  movies:
    array_of: movies_list/movie
    title: description
    year:
      path: year
      modifier: to_i
    duration:
      path: total_minutes
      modifier: minutes_to_hours
    genre:
      path: main_gen
      mapper: genres
    cast:
      array_of: actors/actor
      name:
        path: [firstname, surname]
        modifier:
          name: join
          params: [" "]
      character: char_name
"""

EXPECTED_MOVIES = {
    "movies": [
        {
            "title": "The Lord of the Rings: The Fellowship of the Ring",
            "year": 2001,
            "duration": "3h 29min",
            "genre": "adventure",
            "cast": [
                {"name": "Orlando Bloom", "character": "Legolas"},
                {"name": "Ian Mckellen", "character": "Gandalf"},
            ],
        }
    ]
}


class MovieModifiers:
    """Custom modifiers as a caller would supply them."""

    def minutes_to_hours(self, value):
        total_minutes = int(value)
        hours, minutes = divmod(total_minutes, 60)
        return f"{hours}h {minutes}min"

    def surround(self, value, left, right):
        return f"{left}{value}{right}"

    def _private_helper(self, value):
        return value


@pytest.fixture
def movies_xml():
    return MOVIES_XML


@pytest.fixture
def movies_root():
    return etree.fromstring(MOVIES_XML.encode("utf-8"))


@pytest.fixture
def movies_schema_data():
    return yaml.safe_load(MOVIES_SCHEMA_YAML)


@pytest.fixture
def expected_movies():
    return EXPECTED_MOVIES


@pytest.fixture
def movie_modifiers():
    return MovieModifiers()


@pytest.fixture
def make_node():
    """Factory parsing an XML snippet into an lxml element."""
    def _make_node(xml_text):
        return etree.fromstring(xml_text.encode("utf-8"))
    return _make_node


@pytest.fixture
def movies_schema_file(tmp_path):
    """The reference schema written to a YAML file."""
    schema_file = tmp_path / "movies.yml"
    schema_file.write_text(MOVIES_SCHEMA_YAML, encoding="utf-8")
    return schema_file
