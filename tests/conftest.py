"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json

import pytest

from record_mapper.mapper import Mapper
from record_mapper.mapping import Registry
from record_mapper.records import OriginalRecord


BOOK = {
    "headline": "Hello",
    "lang": "EN",
    "subjects": ["Maps", "Atlases", None],
    "authors": [
        {"name": "Ada", "role": "author"},
        {"name": "Grace", "role": "editor"},
        {"name": "Linus", "role": "author"},
    ],
    "publisher": {"name": "Acme", "place": "Paris"},
}


DUBLIN_CORE = """<?xml version="1.0"?>
<record xmlns:dc="http://purl.org/dc/elements/1.1/">
  <header status="active">
    <identifier>oai:example:1</identifier>
  </header>
  <metadata>
    <dc:title xml:lang="en">Old Maps</dc:title>
    <dc:title xml:lang="fr">Vieilles cartes</dc:title>
    <dc:creator role="author">Ada</dc:creator>
    <dc:creator role="editor">Grace</dc:creator>
    <dc:description>Maps of <b>Europe</b> and Asia</dc:description>
  </metadata>
</record>
"""


@pytest.fixture
def registry() -> Registry:
    """Provide a fresh, empty Registry for each test."""
    return Registry()


@pytest.fixture
def mapper(registry: Registry) -> Mapper:
    """Provide a Mapper bound to the test's registry."""
    return Mapper(registry=registry)


@pytest.fixture
def book_record() -> OriginalRecord:
    return OriginalRecord(content=json.dumps(BOOK), identifier="book-1")


@pytest.fixture
def xml_record() -> OriginalRecord:
    return OriginalRecord(content=DUBLIN_CORE, identifier="dc-1")
