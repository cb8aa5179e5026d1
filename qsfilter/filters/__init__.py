"""
Filter parsing for qsfilter.

This module provides the key grammar, filter identifiers, the multi-value
extractor, the filter families and the reserved directives.
"""

from .grammar import KeyParts, parse_key
from .identifier import FilterId
from .extract import DEFAULT_OPERATOR, RawQuery, extract, split_query
from .scalars import TYPE_NAMES, converter_for
from .models import (
    NumberOperator,
    StringOperator,
    EqualFilter,
    NumberFilter,
    NumberFilters,
    StringFilter,
    StringFilters,
)
from .directives import (
    ORDER_BY_KEY,
    LIMIT_KEY,
    SKIP_KEY,
    Direction,
    OrderBy,
    Limit,
    Skip,
)

__all__ = [
    "KeyParts",
    "parse_key",
    "FilterId",
    "DEFAULT_OPERATOR",
    "RawQuery",
    "extract",
    "split_query",
    "TYPE_NAMES",
    "converter_for",
    "NumberOperator",
    "StringOperator",
    "EqualFilter",
    "NumberFilter",
    "NumberFilters",
    "StringFilter",
    "StringFilters",
    "ORDER_BY_KEY",
    "LIMIT_KEY",
    "SKIP_KEY",
    "Direction",
    "OrderBy",
    "Limit",
    "Skip",
]
