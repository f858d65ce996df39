"""Error types raised while defining and running mappings."""

from __future__ import annotations


class MappingError(Exception):
    """Base class for every error raised by record_mapper."""


class UnsupportedOperationError(MappingError, NotImplementedError):
    """A Value was asked for a capability its format does not have."""


class UnknownMappingError(MappingError, LookupError):
    """No mapping is registered under the requested name."""

    def __init__(self, name: str, known: list[str] | None = None) -> None:
        self.name = name
        message = f"Unknown mapping '{name}'."
        if known:
            message += f" Registered mappings: {', '.join(known)}"
        super().__init__(message)


class DuplicateMappingError(MappingError):
    """A mapping with the same name has already been registered."""


class PathSyntaxError(MappingError, ValueError):
    """A path expression could not be parsed."""


class RecordParseError(MappingError):
    """A record's raw content could not be decoded by its parser."""
