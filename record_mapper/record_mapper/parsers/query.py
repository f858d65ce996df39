"""Path expressions for locating nodes inside a parsed document.

Supported syntax::

    $                 the current context node
    $.name            child named ``name``
    $['name']         child named ``name`` (for names with dots or spaces)
    $.*               every child of the node
    $.items[*]        every element of ``items``
    $.items[0]        the first element of ``items``
    $[1]              the second element of an array document
    $.a.b[-1].c       segments chain left to right

Paths are evaluated through the Value operations, so the same expression
works for every document format.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from record_mapper.errors import PathSyntaxError
from record_mapper.parsers.values import Value, ValueArray

ROOT = "$"

_SEGMENT_RE = re.compile(
    r"""
      \.(?P<name>[^.\[\]'"]+)
    | \[(?P<quoted>'[^']*'|"[^"]*")\]
    | \[(?P<index>-?\d+)\]
    | \[(?P<each>\*)\]
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Step:
    kind: str  # "child", "wildcard", "each" or "index"
    name: str | None = None
    index: int | None = None

    def apply(self, current: ValueArray) -> ValueArray:
        if self.kind == "child":
            return current.field(self.name)
        if self.kind == "wildcard":
            return ValueArray(
                child
                for node in current
                for key in node.children()
                for child in node.get_child_nodes(key)
            )
        elements = ValueArray(element for node in current for element in node.elements())
        if self.kind == "index":
            if -len(elements) <= self.index < len(elements):
                return ValueArray([elements[self.index]])
            return ValueArray()
        return elements


@dataclass(frozen=True)
class Path:
    """A compiled path expression."""

    expression: str
    steps: tuple[Step, ...]

    def resolve(self, context: Value) -> ValueArray:
        current = ValueArray([context])
        for step in self.steps:
            current = step.apply(current)
            if not current:
                break
        return current

    def __str__(self) -> str:
        return self.expression


def is_path(expression: object) -> bool:
    return isinstance(expression, str) and expression.startswith(ROOT)


@lru_cache(maxsize=512)
def compile_path(expression: str) -> Path:
    """Parse ``expression`` into a :class:`Path`, raising on bad syntax."""
    if not is_path(expression):
        raise PathSyntaxError(f"Path '{expression}' must start with '{ROOT}'")

    steps: list[Step] = []
    position = len(ROOT)
    while position < len(expression):
        match = _SEGMENT_RE.match(expression, position)
        if match is None:
            raise PathSyntaxError(
                f"Invalid path '{expression}': unexpected input at position {position}"
            )
        if match.group("name") is not None:
            name = match.group("name")
            steps.append(Step("wildcard") if name == "*" else Step("child", name=name))
        elif match.group("quoted") is not None:
            steps.append(Step("child", name=match.group("quoted")[1:-1]))
        elif match.group("index") is not None:
            steps.append(Step("index", index=int(match.group("index"))))
        else:
            steps.append(Step("each"))
        position = match.end()

    return Path(expression=expression, steps=tuple(steps))
