"""
Query composition and SQL emission for qsfilter.

This module combines field filters with order/limit/skip and renders them as
parametrized SQL.
"""

from .composed import Filterable, QueryFilter
from .builder import (
    SqlQueryBuilder,
    SelectBuildResult,
    apply_filter,
    filter_predicates,
    build_where_clause_and_params,
    build_select_from_query,
)

__all__ = [
    "Filterable",
    "QueryFilter",
    "SqlQueryBuilder",
    "SelectBuildResult",
    "apply_filter",
    "filter_predicates",
    "build_where_clause_and_params",
    "build_select_from_query",
]
