"""Named store of compiled mappings."""

from __future__ import annotations

import logging

from record_mapper.errors import DuplicateMappingError, UnknownMappingError
from record_mapper.mapping.engine import Mapping

logger = logging.getLogger(__name__)


class Registry:
    """Maps unique names to compiled mappings.

    Populate it while defining mappings and only read it while mapping
    records; redefining names during an active mapping run is not supported.
    """

    def __init__(self) -> None:
        self._mappings: dict[str, Mapping] = {}

    def register(self, name: str, mapping: Mapping) -> Mapping:
        if name in self._mappings:
            raise DuplicateMappingError(f"Mapping '{name}' is already registered.")
        self._mappings[name] = mapping
        logger.debug("Registered mapping '%s' for %s", name, mapping.target_class.__name__)
        return mapping

    def get(self, name: str) -> Mapping:
        if name not in self._mappings:
            raise UnknownMappingError(name, self.names())
        return self._mappings[name]

    def names(self) -> list[str]:
        return sorted(self._mappings.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)
