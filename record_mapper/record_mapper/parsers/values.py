"""Format-independent view over parsed documents."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Protocol, overload


class Value(Protocol):
    """One node of a parsed document.

    Each supported format ships its own implementation. The mapping layer
    only talks to nodes through these operations, never through the
    format's native objects.

    ``elements`` returns the items of an array node, or the node itself for
    anything else; index steps in paths pick from it.
    """

    @property
    def value(self) -> Any: ...

    def children(self) -> list[str]: ...

    def attributes(self) -> list[str]: ...

    def attribute(self, name: str) -> Any: ...

    def has_values(self) -> bool: ...

    def get_child_nodes(self, name: str) -> ValueArray: ...

    def elements(self) -> ValueArray: ...


class ValueArray(Sequence[Value]):
    """An ordered, immutable collection of Values.

    Optional and repeated fields come back as the same type, so callers can
    treat a missing field as an empty array and a repeated one as a longer
    array.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[Value] = ()) -> None:
        self._values: tuple[Value, ...] = tuple(values)

    @overload
    def __getitem__(self, index: int) -> Value: ...

    @overload
    def __getitem__(self, index: slice) -> ValueArray: ...

    def __getitem__(self, index: int | slice) -> Value | ValueArray:
        if isinstance(index, slice):
            return ValueArray(self._values[index])
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueArray):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ValueArray({list(self._values)!r})"

    def values(self) -> list[Any]:
        """Return the scalar value of every node."""
        return [node.value for node in self._values]

    def has_values(self) -> bool:
        return any(node.has_values() for node in self._values)

    def field(self, *names: str) -> ValueArray:
        """Follow a chain of child names from every node in the array.

        ``field("creator", "name")`` returns the ``name`` children of every
        ``creator`` child.
        """
        current = self
        for name in names:
            current = ValueArray(
                child for node in current for child in node.get_child_nodes(name)
            )
        return current

    def fields(self, *paths: str | Sequence[str]) -> ValueArray:
        """Concatenate the results of several ``field`` chains."""
        collected: list[Value] = []
        for path in paths:
            names = (path,) if isinstance(path, str) else tuple(path)
            collected.extend(self.field(*names))
        return ValueArray(collected)

    def first_value(self) -> ValueArray:
        return ValueArray(self._values[:1])

    def last_value(self) -> ValueArray:
        return ValueArray(self._values[-1:])

    def select(self, predicate: Callable[[Value], bool]) -> ValueArray:
        return ValueArray(node for node in self._values if predicate(node))

    def reject(self, predicate: Callable[[Value], bool]) -> ValueArray:
        return ValueArray(node for node in self._values if not predicate(node))

    def map(self, func: Callable[[Value], Any]) -> list[Any]:
        return [func(node) for node in self._values]

    def match_attribute(self, name: str, expected: Any = None) -> ValueArray:
        """Keep nodes whose attribute ``name`` equals ``expected``.

        With no ``expected`` value, keep nodes where the attribute is present.
        Formats without attributes raise ``UnsupportedOperationError`` for
        every node checked. An empty array has no node to check, so it gives
        an empty array whatever the format.
        """
        if expected is None:
            return self.select(lambda node: node.attribute(name) is not None)
        return self.select(lambda node: node.attribute(name) == expected)

    def concat(self, other: Iterable[Value]) -> ValueArray:
        return ValueArray((*self._values, *other))
