"""JSON-tree documents."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from record_mapper.errors import RecordParseError, UnsupportedOperationError
from record_mapper.parsers.base import Parser
from record_mapper.parsers.query import ROOT
from record_mapper.parsers.values import ValueArray


class JsonValue:
    """A node of a decoded JSON document."""

    __slots__ = ("_node",)

    def __init__(self, node: Any) -> None:
        self._node = node

    @property
    def value(self) -> Any:
        if isinstance(self._node, dict):
            return json.dumps(self._node, ensure_ascii=False)
        return self._node

    def children(self) -> list[str]:
        return list(self._node.keys()) if isinstance(self._node, dict) else []

    def attributes(self) -> list[str]:
        raise UnsupportedOperationError("Attributes are not supported for JSON")

    def attribute(self, name: str) -> Any:
        raise UnsupportedOperationError(
            f"Attributes are not supported for JSON; got attribute `{name}`"
        )

    def has_values(self) -> bool:
        if self._node is None or isinstance(self._node, dict):
            return False
        if isinstance(self._node, (list, str)):
            return bool(self._node)
        return True

    def get_child_nodes(self, name: str) -> ValueArray:
        return ValueArray(
            JsonValue(child) for child in _lookup(self._node, name) if child is not None
        )

    def elements(self) -> ValueArray:
        if isinstance(self._node, list):
            return ValueArray(JsonValue(item) for item in self._node if item is not None)
        return ValueArray([self])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return self._node == other._node

    def __repr__(self) -> str:
        return f"JsonValue({self._node!r})"


def _flatten(node: list[Any]) -> Iterator[Any]:
    for item in node:
        if isinstance(item, list):
            yield from _flatten(item)
        else:
            yield item


def _lookup(node: Any, name: str) -> list[Any]:
    # A list node is looked up through its first element, once flattened.
    if isinstance(node, list):
        node = next(_flatten(node), None)
    if not isinstance(node, dict):
        return []

    child = node.get(name)
    if isinstance(child, list):
        return child
    return [child]


def decode_json(content: Any) -> Any:
    if isinstance(content, bytes):
        content = content.decode("utf-8")
    if not isinstance(content, str):
        return content
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise RecordParseError(f"Record content is not valid JSON: {exc}") from exc


class JsonParser(Parser):
    """Parser for records whose content is JSON text or a decoded JSON tree."""

    format_name = "json"

    def __init__(self, record: Any, root_path: str = ROOT) -> None:
        document = JsonValue(decode_json(record.content))
        root = self.select_root(document, root_path)
        super().__init__(record, root if root is not None else JsonValue(None))
