"""Mapping definitions, compiled mappings and their registry."""

from record_mapper.mapping.dsl import Literal, MappingBuilder, RecordExpression, record
from record_mapper.mapping.engine import Mapping, NestedAssignment, PropertyAssignment
from record_mapper.mapping.registry import Registry


__all__ = [
    "Literal",
    "Mapping",
    "MappingBuilder",
    "NestedAssignment",
    "PropertyAssignment",
    "RecordExpression",
    "Registry",
    "record",
]
