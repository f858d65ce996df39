from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OriginalRecord:
    """A harvested record as handed to a parser.

    ``content`` holds the raw document: text, bytes, or an already decoded
    JSON tree. ``identifier`` is only used to name the record in messages.
    """

    content: Any
    identifier: str | None = None

    def __str__(self) -> str:
        return self.identifier or "<anonymous record>"
