"""Tests for the mapping Registry."""

from __future__ import annotations

import pytest

from record_mapper.errors import DuplicateMappingError, UnknownMappingError
from record_mapper.mapping import Mapping, Registry
from record_mapper.models import Aggregation
from record_mapper.parsers import JsonParser


def make_mapping() -> Mapping:
    return Mapping(target_class=Aggregation, parser_class=JsonParser)


class TestRegistry:
    """Test registration and lookup."""

    def test_starts_empty(self, registry: Registry) -> None:
        assert len(registry) == 0
        assert registry.names() == []

    def test_register_and_get(self, registry: Registry) -> None:
        mapping = make_mapping()

        assert registry.register("basic", mapping) is mapping
        assert registry.get("basic") is mapping
        assert "basic" in registry

    def test_duplicate_name_rejected(self, registry: Registry) -> None:
        original = make_mapping()
        registry.register("basic", original)

        with pytest.raises(DuplicateMappingError, match="basic"):
            registry.register("basic", make_mapping())
        assert registry.get("basic") is original

    def test_unknown_name(self, registry: Registry) -> None:
        registry.register("basic", make_mapping())

        with pytest.raises(UnknownMappingError, match="Unknown mapping 'missing'") as excinfo:
            registry.get("missing")
        assert excinfo.value.name == "missing"
        assert "basic" in str(excinfo.value)

    def test_unknown_name_is_lookup_error(self, registry: Registry) -> None:
        with pytest.raises(LookupError):
            registry.get("missing")

    def test_registries_are_isolated(self) -> None:
        first, second = Registry(), Registry()
        first.register("basic", make_mapping())

        assert "basic" not in second

    def test_names_sorted(self, registry: Registry) -> None:
        registry.register("zeta", make_mapping())
        registry.register("alpha", make_mapping())

        assert registry.names() == ["alpha", "zeta"]
