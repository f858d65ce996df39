"""Property-bag domain objects populated by mappings."""

from __future__ import annotations

from typing import Any


class Resource:
    """A domain object whose properties are assigned one at a time."""

    def __init__(self, **properties: Any) -> None:
        for name, value in properties.items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        """Return the properties as plain data, converting nested resources."""
        return {name: _plain(value) for name, value in vars(self).items()}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        props = ", ".join(f"{name}={value!r}" for name, value in vars(self).items())
        return f"{type(self).__name__}({props})"


class Aggregation(Resource):
    """Default target class: the aggregation describing one harvested item."""


def _plain(value: Any) -> Any:
    if isinstance(value, Resource):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
