"""Named value remapping with a default fallback."""

import logging
from typing import Any, Mapping

from ..exceptions import UnknownMapper
from ..models import MapperDefinition


class ValueMapper:
    """
    Resolves raw values through the mappers declared in a schema.

    Matching is an exact, case-sensitive comparison of ``str(raw_value)``
    against the option keys. A value without an option gets the mapper's
    default; that is the only silent fallback in the whole extraction.
    """

    def __init__(self, mappers: Mapping[str, MapperDefinition]):
        self.logger = logging.getLogger(__name__)
        self._mappers = mappers

    def get_mapper(self, mapper_name: str) -> MapperDefinition:
        if mapper_name not in self._mappers:
            raise UnknownMapper(mapper_name)
        return self._mappers[mapper_name]

    def map(self, mapper_name: str, raw_value: Any) -> Any:
        """
        Map a raw value through the named mapper.

        Raises:
            UnknownMapper: If no mapper with that name is declared
        """
        mapper = self.get_mapper(mapper_name)
        key = str(raw_value)
        if key in mapper.options:
            return mapper.options[key]

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"No option for '{key}' in mapper '{mapper_name}', using default {mapper.default!r}")
        return mapper.default
