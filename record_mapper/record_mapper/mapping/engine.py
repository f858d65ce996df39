"""Compiled mappings and the code that runs them against records."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from record_mapper.parsers import Parser, Path, Value, ValueArray

logger = logging.getLogger(__name__)

# Marks a value expression that matched nothing in the record.
UNRESOLVED = object()


class Source(Protocol):
    def evaluate(self, parser: Parser, context: Value) -> Any: ...


class Assignment(Protocol):
    name: str

    def apply(self, target: Any, parser: Parser, context: Value) -> None: ...


def evaluate(source: Path | Source, parser: Parser, context: Value) -> Any:
    if isinstance(source, Path):
        return parser.resolve(source, context)
    return source.evaluate(parser, context)


def unwrap(resolved: Any, many: bool = False) -> Any:
    """Turn a resolved expression into the plain value to assign.

    ValueArrays become a scalar (one value) or a list (several values, or
    ``many``). An empty ValueArray is ``UNRESOLVED``, and so is the empty
    list a terminal expression such as ``values()`` gives for a missing path.
    """
    if isinstance(resolved, list) and not resolved:
        return UNRESOLVED
    if not isinstance(resolved, ValueArray):
        if many and not isinstance(resolved, list):
            return [resolved]
        return resolved

    values = [value for value in resolved.values() if value is not None]
    if not values:
        return UNRESOLVED
    if many or len(values) > 1:
        return values
    return values[0]


@dataclass(frozen=True)
class PropertyAssignment:
    """Assigns a literal, path or record expression to one property."""

    name: str
    source: Path | Source
    transform: Callable[[Any], Any] | None = None
    many: bool = False

    def apply(self, target: Any, parser: Parser, context: Value) -> None:
        value = unwrap(evaluate(self.source, parser, context), self.many)
        if value is UNRESOLVED:
            logger.debug("No value for '%s' in record %s", self.name, parser.record)
            return
        if self.transform is not None:
            value = self.transform(value)
        setattr(target, self.name, value)


@dataclass(frozen=True)
class NestedAssignment:
    """Maps child nodes to sub-objects and assigns them to one property.

    With no ``path`` the sub-object reads from the enclosing context.
    """

    name: str
    target_class: type
    assignments: tuple[Assignment, ...]
    path: Path | None = None
    many: bool = False

    def apply(self, target: Any, parser: Parser, context: Value) -> None:
        if self.path is None:
            contexts = ValueArray([context])
        else:
            contexts = parser.resolve(self.path, context)

        objects = [self._build(parser, child) for child in contexts]
        if not objects:
            logger.debug("No nodes for nested '%s' in record %s", self.name, parser.record)
            return
        setattr(target, self.name, objects if self.many or len(objects) > 1 else objects[0])

    def _build(self, parser: Parser, context: Value) -> Any:
        obj = self.target_class()
        for assignment in self.assignments:
            assignment.apply(obj, parser, context)
        return obj


@dataclass(frozen=True)
class Mapping:
    """A compiled mapping from one record format to one target class.

    Mappings hold no per-record state; ``process_record`` may be called
    repeatedly and from several threads.
    """

    target_class: type
    parser_class: type[Parser]
    parser_args: tuple[Any, ...] = ()
    assignments: tuple[Assignment, ...] = ()

    def process_record(self, record: Any) -> Any:
        parser = self.parser_class(record, *self.parser_args)
        target = self.target_class()
        for assignment in self.assignments:
            assignment.apply(target, parser, parser.root)
        return target

    def property_names(self) -> list[str]:
        return [assignment.name for assignment in self.assignments]
