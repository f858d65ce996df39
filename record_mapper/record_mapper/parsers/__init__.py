"""Parsers and Values for each supported document format."""

from record_mapper.parsers.base import Parser
from record_mapper.parsers.json_parser import JsonParser, JsonValue
from record_mapper.parsers.query import Path, compile_path, is_path
from record_mapper.parsers.values import Value, ValueArray
from record_mapper.parsers.xml_parser import XmlParser, XmlValue


# Format name -> parser class.
PARSERS: dict[str, type[Parser]] = {
    JsonParser.format_name: JsonParser,
    XmlParser.format_name: XmlParser,
}


def list_parsers() -> list[str]:
    return sorted(PARSERS.keys())


def get_parser(name: str) -> type[Parser]:
    if name not in PARSERS:
        supported = ", ".join(list_parsers())
        raise ValueError(f"Unknown parser '{name}'. Supported parsers: {supported}")
    return PARSERS[name]


__all__ = [
    "JsonParser",
    "JsonValue",
    "PARSERS",
    "Parser",
    "Path",
    "Value",
    "ValueArray",
    "XmlParser",
    "XmlValue",
    "compile_path",
    "get_parser",
    "is_path",
    "list_parsers",
]
