"""Builder API used inside mapping definitions.

A definition is a function that receives a :class:`MappingBuilder`::

    def define_book(m: MappingBuilder) -> None:
        m.set("title", "$.headline")
        m.set("language", "$.lang", str.lower)
        m.set("rights", "Public domain")

        @m.nested("creator", cls=Agent, path="$.authors")
        def _creator(agent: MappingBuilder) -> None:
            agent.set("name", "$.name")

Strings starting with ``$`` are paths into the record; other values are
assigned as they are. Wrap a string in :class:`Literal` to assign it
verbatim even if it starts with ``$``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from record_mapper.mapping.engine import (
    Assignment,
    Mapping,
    NestedAssignment,
    PropertyAssignment,
    Source,
)
from record_mapper.models import Resource
from record_mapper.parsers import Parser, Path, Value, ValueArray, compile_path, is_path


@dataclass(frozen=True)
class Literal:
    value: Any

    def evaluate(self, parser: Parser, context: Value) -> Any:
        return self.value


Step = Callable[[Any, Parser, Value], Any]
DefinitionBlock = Callable[["MappingBuilder"], None]


class RecordExpression:
    """A deferred chain of ValueArray operations.

    Each method returns a new expression; nothing is evaluated until the
    mapping runs, when the chain starts from the current context node.
    Use the module-level ``record`` as the starting point.
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Sequence[Step] = ()) -> None:
        self._steps: tuple[Step, ...] = tuple(steps)

    def _then(self, func: Callable[[Any], Any]) -> RecordExpression:
        return RecordExpression((*self._steps, lambda nodes, parser, context: func(nodes)))

    def field(self, *names: str) -> RecordExpression:
        return self._then(lambda nodes: nodes.field(*names))

    def fields(self, *paths: str | Sequence[str]) -> RecordExpression:
        return self._then(lambda nodes: nodes.fields(*paths))

    def path(self, expression: str) -> RecordExpression:
        compiled = compile_path(expression)
        return self._then(
            lambda nodes: ValueArray(child for node in nodes for child in compiled.resolve(node))
        )

    def first_value(self) -> RecordExpression:
        return self._then(lambda nodes: nodes.first_value())

    def last_value(self) -> RecordExpression:
        return self._then(lambda nodes: nodes.last_value())

    def select(self, predicate: Callable[[Value], bool]) -> RecordExpression:
        return self._then(lambda nodes: nodes.select(predicate))

    def reject(self, predicate: Callable[[Value], bool]) -> RecordExpression:
        return self._then(lambda nodes: nodes.reject(predicate))

    def match_attribute(self, name: str, expected: Any = None) -> RecordExpression:
        return self._then(lambda nodes: nodes.match_attribute(name, expected))

    def concat(self, other: RecordExpression) -> RecordExpression:
        def step(nodes: Any, parser: Parser, context: Value) -> Any:
            return nodes.concat(other.evaluate(parser, context))

        return RecordExpression((*self._steps, step))

    def values(self) -> RecordExpression:
        return self._then(lambda nodes: nodes.values())

    def map(self, func: Callable[[Value], Any]) -> RecordExpression:
        return self._then(lambda nodes: nodes.map(func))

    def evaluate(self, parser: Parser, context: Value) -> Any:
        result: Any = ValueArray([context])
        for step in self._steps:
            result = step(result, parser, context)
        return result


record = RecordExpression()


def compile_source(value: Any) -> Path | Source:
    if isinstance(value, (Literal, RecordExpression, Path)):
        return value
    if is_path(value):
        return compile_path(value)
    return Literal(value)


class MappingBuilder:
    """Collects property assignments while a definition function runs."""

    def __init__(self) -> None:
        self._assignments: list[Assignment] = []

    def set(
        self,
        name: str,
        value: Any,
        transform: Callable[[Any], Any] | None = None,
        *,
        many: bool = False,
    ) -> MappingBuilder:
        """Assign ``value`` to property ``name``.

        ``transform`` is called once with the resolved plain value and its
        result is assigned. Paths that match nothing leave the property unset
        and skip the transform.
        """
        self._assignments.append(
            PropertyAssignment(
                name=name, source=compile_source(value), transform=transform, many=many
            )
        )
        return self

    def nested(
        self,
        name: str,
        block: DefinitionBlock | None = None,
        *,
        cls: type = Resource,
        path: str | None = None,
        many: bool = False,
    ) -> Any:
        """Map the nodes at ``path`` to ``cls`` objects using ``block``.

        Without ``block`` this returns a decorator taking the block.
        """
        if block is None:

            def decorator(func: DefinitionBlock) -> DefinitionBlock:
                self.nested(name, func, cls=cls, path=path, many=many)
                return func

            return decorator

        child = MappingBuilder()
        block(child)
        self._assignments.append(
            NestedAssignment(
                name=name,
                target_class=cls,
                assignments=child.assignments(),
                path=compile_path(path) if path is not None else None,
                many=many,
            )
        )
        return self

    def assignments(self) -> tuple[Assignment, ...]:
        return tuple(self._assignments)

    def build(
        self,
        target_class: type,
        parser_class: type[Parser],
        parser_args: Sequence[Any] = (),
    ) -> Mapping:
        return Mapping(
            target_class=target_class,
            parser_class=parser_class,
            parser_args=tuple(parser_args),
            assignments=self.assignments(),
        )
