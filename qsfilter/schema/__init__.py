"""
Schema description for qsfilter.

This module declares filterable fields and loads named schemas from disk.
"""

from .descriptor import (
    FilterKind,
    FieldSpec,
    FilterSet,
    FilterSchema,
    SCHEMA_DOCUMENT_SCHEMA,
)
from .registry import RegistryEntry, SchemaRegistry

__all__ = [
    "FilterKind",
    "FieldSpec",
    "FilterSet",
    "FilterSchema",
    "SCHEMA_DOCUMENT_SCHEMA",
    "RegistryEntry",
    "SchemaRegistry",
]
