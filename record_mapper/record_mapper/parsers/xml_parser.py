"""XML documents, with attribute support and namespace prefixes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as SafeET

from record_mapper.errors import RecordParseError
from record_mapper.parsers.base import Parser
from record_mapper.parsers.query import ROOT
from record_mapper.parsers.values import ValueArray

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class XmlValue:
    """An element of a parsed XML document.

    ``namespaces`` maps prefixes to URIs so that child and attribute names
    can be written as ``dc:title``.
    """

    __slots__ = ("_element", "_namespaces")

    def __init__(self, element: Element, namespaces: Mapping[str, str] | None = None) -> None:
        self._element = element
        self._namespaces = {"xml": XML_NAMESPACE, **(namespaces or {})}

    @property
    def value(self) -> str:
        if len(self._element) == 0:
            return (self._element.text or "").strip()
        pieces = (piece.strip() for piece in self._element.itertext())
        return " ".join(piece for piece in pieces if piece)

    def children(self) -> list[str]:
        names = (self._prefixed(child.tag) for child in self._element)
        return list(dict.fromkeys(names))

    def attributes(self) -> list[str]:
        return [self._prefixed(name) for name in self._element.attrib]

    def attribute(self, name: str) -> str | None:
        return self._element.get(self._expanded(name))

    def has_values(self) -> bool:
        return bool((self._element.text or "").strip())

    def get_child_nodes(self, name: str) -> ValueArray:
        tag = self._expanded(name, default_namespace=True)
        return ValueArray(
            XmlValue(child, self._namespaces) for child in self._element if child.tag == tag
        )

    def elements(self) -> ValueArray:
        return ValueArray([self])

    def _prefixed(self, tag: str) -> str:
        if not tag.startswith("{"):
            return tag
        uri, _, local = tag[1:].partition("}")
        for prefix, known in self._namespaces.items():
            if known == uri:
                return f"{prefix}:{local}" if prefix else local
        return tag

    def _expanded(self, name: str, default_namespace: bool = False) -> str:
        prefix, sep, local = name.partition(":")
        if sep and prefix in self._namespaces:
            return f"{{{self._namespaces[prefix]}}}{local}"
        # Unprefixed attributes never take the default namespace.
        if not sep and default_namespace and self._namespaces.get("") and name[:1] != "{":
            return f"{{{self._namespaces['']}}}{name}"
        return name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XmlValue):
            return NotImplemented
        return self._element is other._element

    def __repr__(self) -> str:
        return f"XmlValue(<{self._element.tag}>)"


def decode_xml(content: Any) -> Element:
    if isinstance(content, Element):
        return content
    try:
        return SafeET.fromstring(content)
    except (ParseError, DefusedXmlException) as exc:
        raise RecordParseError(f"Record content is not valid XML: {exc}") from exc


class XmlParser(Parser):
    """Parser for records whose content is an XML document."""

    format_name = "xml"

    def __init__(
        self,
        record: Any,
        root_path: str = ROOT,
        namespaces: Mapping[str, str] | None = None,
    ) -> None:
        document = XmlValue(decode_xml(record.content), namespaces)
        root = self.select_root(document, root_path)
        if root is None:
            root = XmlValue(Element("empty"), namespaces)
        super().__init__(record, root)
