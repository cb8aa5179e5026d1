"""
qsfilter: typed filters from bracket-notation query strings.

    age[gte]=18&age[lt]=30&name[sw]=Al&order_by[desc]=age&limit=10

Web (FastAPI) integration lives in `qsfilter.web` and is not imported here.
"""

from .errors import (
    FilterParseError,
    FilterStructureError,
    FilterValueError,
    UnknownFilterError,
)
from .filters import (
    FilterId,
    KeyParts,
    parse_key,
    extract,
    split_query,
    NumberOperator,
    StringOperator,
    EqualFilter,
    NumberFilter,
    NumberFilters,
    StringFilter,
    StringFilters,
    Direction,
    OrderBy,
    Limit,
    Skip,
)
from .query import (
    Filterable,
    QueryFilter,
    SqlQueryBuilder,
    SelectBuildResult,
    apply_filter,
    build_where_clause_and_params,
    build_select_from_query,
)
from .schema import (
    FilterKind,
    FieldSpec,
    FilterSet,
    FilterSchema,
    SchemaRegistry,
)

__all__ = [
    "FilterParseError",
    "FilterStructureError",
    "FilterValueError",
    "UnknownFilterError",
    "FilterId",
    "KeyParts",
    "parse_key",
    "extract",
    "split_query",
    "NumberOperator",
    "StringOperator",
    "EqualFilter",
    "NumberFilter",
    "NumberFilters",
    "StringFilter",
    "StringFilters",
    "Direction",
    "OrderBy",
    "Limit",
    "Skip",
    "Filterable",
    "QueryFilter",
    "SqlQueryBuilder",
    "SelectBuildResult",
    "apply_filter",
    "build_where_clause_and_params",
    "build_select_from_query",
    "FilterKind",
    "FieldSpec",
    "FilterSet",
    "FilterSchema",
    "SchemaRegistry",
]
