"""Public entry point for defining mappings and mapping records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from record_mapper.errors import UnsupportedOperationError
from record_mapper.mapping import Mapping, MappingBuilder, Registry
from record_mapper.mapping.dsl import DefinitionBlock
from record_mapper.models import Aggregation
from record_mapper.parsers import JsonParser, Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapperConfig:
    """Defaults applied to mappings that do not name their own."""

    default_class: type = Aggregation
    default_parser: type[Parser] = JsonParser
    default_parser_args: tuple[Any, ...] = ()


@dataclass(frozen=True)
class MappingResult:
    """Outcome of mapping one record: a populated object or the error raised."""

    record: Any
    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return None if self.error is None else str(self.error)

    def unwrap(self) -> Any:
        """Return the mapped object, re-raising the error of a failed result."""
        if self.error is not None:
            raise self.error
        return self.value


class Mapper:
    """Defines named mappings and applies them to records.

    Each mapper owns a :class:`Registry`; pass one in to share definitions
    between mappers.
    """

    def __init__(self, registry: Registry | None = None, config: MapperConfig | None = None):
        self.registry = registry if registry is not None else Registry()
        self.config = config if config is not None else MapperConfig()

    def define(
        self,
        name: str,
        block: DefinitionBlock | None = None,
        *,
        cls: type | None = None,
        parser: type[Parser] | None = None,
        parser_args: Sequence[Any] | None = None,
    ) -> Mapping:
        """Compile ``block`` into a mapping and register it under ``name``."""
        builder = MappingBuilder()
        if block is not None:
            block(builder)

        mapping = builder.build(
            target_class=cls or self.config.default_class,
            parser_class=parser or self.config.default_parser,
            parser_args=self.config.default_parser_args if parser_args is None else parser_args,
        )
        return self.registry.register(name, mapping)

    def mapping(self, name: str, **options: Any) -> Callable[[DefinitionBlock], DefinitionBlock]:
        """Decorator form of :meth:`define`."""

        def decorator(block: DefinitionBlock) -> DefinitionBlock:
            self.define(name, block, **options)
            return block

        return decorator

    def map(self, name: str, records: Any) -> list[MappingResult]:
        """Map one record or an iterable of records with the mapping ``name``.

        Returns one result per record, in input order. A failure while mapping
        a record is logged and returned as a failed result; the remaining
        records are still mapped.
        """
        mapping = self.registry.get(name)

        results: list[MappingResult] = []
        for record in _as_records(records):
            try:
                value = mapping.process_record(record)
            except UnsupportedOperationError:
                raise
            except Exception as exc:
                logger.error("Failed to map record %s with '%s': %s", record, name, exc)
                results.append(MappingResult(record=record, error=exc))
                continue
            results.append(MappingResult(record=record, value=value))

        failed = sum(1 for result in results if not result.ok)
        logger.info("Mapped %d record(s) with '%s', %d failed", len(results), name, failed)
        return results


def _as_records(records: Any) -> list[Any]:
    if hasattr(records, "content"):
        return [records]
    if isinstance(records, Iterable) and not isinstance(records, (str, bytes, dict)):
        return list(records)
    return [records]
