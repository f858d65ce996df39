from __future__ import annotations

from typing import Any

from record_mapper.parsers.query import ROOT, Path, compile_path
from record_mapper.parsers.values import Value, ValueArray


class Parser:
    """Binds the root Value of one record and resolves paths against it.

    Format implementations decode ``record.content`` and pass the resolved
    root node to this initializer. A parser is created per record and holds
    no state shared with other records.
    """

    format_name = "abstract"

    def __init__(self, record: Any, root: Value) -> None:
        self.record = record
        self.root = root

    def get_child_nodes(self, name: str) -> ValueArray:
        return self.root.get_child_nodes(name)

    def resolve(self, path: str | Path, context: Value | None = None) -> ValueArray:
        """Evaluate ``path`` from ``context``, defaulting to the parser root."""
        compiled = path if isinstance(path, Path) else compile_path(path)
        return compiled.resolve(self.root if context is None else context)

    @staticmethod
    def select_root(document: Value, root_path: str = ROOT) -> Value | None:
        """Return the first node matched by ``root_path``, if any."""
        matches = compile_path(root_path).resolve(document)
        return matches[0] if matches else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(record={self.record!s}, root={self.root!r})"
