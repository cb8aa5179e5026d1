from __future__ import annotations
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import re

from ..filters import (
    Direction,
    EqualFilter,
    FilterId,
    Limit,
    NumberFilters,
    OrderBy,
    Skip,
    StringFilters,
)
from .composed import QueryFilter

_UNQUOTED_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")

Params = Union[List[Any], Dict[str, Any]]

_COMPARE_SQL = {
    "eq": "=",
    "ne": "<>",
    "gt": ">",
    "lt": "<",
    "gte": ">=",
    "lte": "<=",
}

def _quote_identifier(name: str, *, quote_identifiers: bool) -> str:
    """
    Quote an identifier if needed. Doubles internal quotes.
    """
    if not quote_identifiers and _UNQUOTED_IDENT_RE.match(name):
        return name
    escaped = name.replace('"', '""')
    return f'"{escaped}"'

def _quote_dotted_identifier(name: str, *, quote_identifiers: bool) -> str:
    """
    Quote a possibly dotted identifier (e.g., db.schema.table).
    """
    parts = [p.strip() for p in name.split(".")]
    return ".".join(_quote_identifier(p, quote_identifiers=quote_identifiers) for p in parts)

def _escape_like(value: str) -> str:
    """
    Escape \\, %, _ in LIKE patterns. We'll use ESCAPE '\\' in SQL.
    """
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%").replace("_", "\\_")
    return value

def _column(fid: FilterId, *, qualify_columns: bool, quote_identifiers: bool) -> str:
    col = _quote_identifier(fid.key, quote_identifiers=quote_identifiers)
    if qualify_columns and fid.prefix:
        return _quote_identifier(fid.prefix, quote_identifiers=quote_identifiers) + "." + col
    return col


class SqlQueryBuilder:
    """
    Accumulates SQL text and bound parameters, returning the right
    placeholder per paramstyle:
      - 'qmark'    -> ?, params is a list
      - 'pyformat' -> %(p1)s, params is a dict
    """
    def __init__(
        self,
        initial_sql: str = "",
        paramstyle: str = "qmark",
        *,
        prefix: str = "p",
        start_index: int = 1,
    ):
        if paramstyle not in {"qmark", "pyformat"}:
            raise ValueError("paramstyle must be 'qmark' or 'pyformat'")
        self.paramstyle = paramstyle
        self.prefix = prefix
        self.next_idx = start_index
        self._parts: List[str] = [initial_sql] if initial_sql else []
        self.params_list: List[Any] = []
        self.params_dict: Dict[str, Any] = {}

    def push(self, sql: str) -> "SqlQueryBuilder":
        self._parts.append(sql)
        return self

    def add(self, value: Any) -> str:
        """Register a bound value and return its placeholder without emitting it."""
        if self.paramstyle == "qmark":
            self.params_list.append(value)
            return "?"
        name = f"{self.prefix}{self.next_idx}"
        self.next_idx += 1
        self.params_dict[name] = value
        return f"%({name})s"

    def push_bind(self, value: Any) -> "SqlQueryBuilder":
        self._parts.append(self.add(value))
        return self

    @property
    def sql(self) -> str:
        return "".join(self._parts)

    @property
    def params(self) -> Params:
        return self.params_list if self.paramstyle == "qmark" else self.params_dict


def _string_predicate(col: str, op: str, value: Any, ph_for, *, use_ilike: bool) -> str:
    like_kw = "ILIKE" if use_ilike else "LIKE"
    if op == "eq":
        return f"{col} = {ph_for(value)}"
    if op == "ne":
        return f"{col} <> {ph_for(value)}"
    if op == "like":
        return f"{col} {like_kw} {ph_for(str(value))}"
    if op == "not_like":
        return f"{col} NOT {like_kw} {ph_for(str(value))}"

    lit = _escape_like(str(value))
    if op == "starts_with":
        patt = f"{lit}%"
    elif op == "ends_with":
        patt = f"%{lit}"
    elif op == "contains":
        patt = f"%{lit}%"
    else:
        raise ValueError(f"Unsupported operator: {op}")
    return f"{col} {like_kw} {ph_for(patt)} ESCAPE '\\'"


def filter_predicates(
    obj: Any,
    qb: SqlQueryBuilder,
    *,
    use_ilike: bool = False,
    quote_identifiers: bool = False,
    qualify_columns: bool = False,
) -> List[str]:
    """
    Render the predicates of one filter (or of every filter in a FilterSet /
    mapping) and register their bound values on `qb`.
    """
    if isinstance(obj, (EqualFilter, NumberFilters, StringFilters)):
        if obj.id is None:
            return []
        col = _column(obj.id, qualify_columns=qualify_columns, quote_identifiers=quote_identifiers)
        if isinstance(obj, StringFilters):
            return [
                _string_predicate(col, op, v, qb.add, use_ilike=use_ilike)
                for op, v in obj.pairs()
            ]
        return [f"{col} {_COMPARE_SQL[op]} {qb.add(v)}" for op, v in obj.pairs()]

    if isinstance(obj, Mapping):
        out: List[str] = []
        for value in obj.values():
            out.extend(filter_predicates(
                value,
                qb,
                use_ilike=use_ilike,
                quote_identifiers=quote_identifiers,
                qualify_columns=qualify_columns,
            ))
        return out

    if is_dataclass(obj) and not isinstance(obj, type):
        out = []
        for f in fields(obj):
            out.extend(filter_predicates(
                getattr(obj, f.name),
                qb,
                use_ilike=use_ilike,
                quote_identifiers=quote_identifiers,
                qualify_columns=qualify_columns,
            ))
        return out

    # skipped fields carry plain default values
    return []


def _order_sql(order_by: OrderBy, *, quote_identifiers: bool, qualify_columns: bool) -> str:
    col = _column(order_by.id, qualify_columns=qualify_columns, quote_identifiers=quote_identifiers)
    direction = "DESC" if order_by.direction == Direction.DESC else "ASC"
    return f"ORDER BY {col} {direction}"


def apply_filter(
    qb: SqlQueryBuilder,
    obj: Any,
    *,
    use_ilike: bool = False,
    quote_identifiers: bool = False,
    qualify_columns: bool = False,
) -> SqlQueryBuilder:
    """
    Append `obj` to a query that already ends in a WHERE clause, e.g.
    'SELECT * FROM users WHERE 1=1':

      - filters      -> ' AND col op ?' per comparison
      - OrderBy      -> ' ORDER BY col ASC|DESC'
      - Limit / Skip -> ' LIMIT ?' / ' OFFSET ?'
      - QueryFilter  -> inner filters, then order, limit and skip
    """
    opts = dict(quote_identifiers=quote_identifiers, qualify_columns=qualify_columns)

    if isinstance(obj, QueryFilter):
        if obj.inner is not None:
            apply_filter(qb, obj.inner, use_ilike=use_ilike, **opts)
        for directive in (obj.order_by, obj.limit, obj.skip):
            if directive is not None:
                apply_filter(qb, directive, **opts)
        return qb

    if isinstance(obj, OrderBy):
        return qb.push(" " + _order_sql(obj, **opts))
    if isinstance(obj, Limit):
        return qb.push(" LIMIT ").push_bind(obj.value)
    if isinstance(obj, Skip):
        return qb.push(" OFFSET ").push_bind(obj.value)

    for predicate in filter_predicates(obj, qb, use_ilike=use_ilike, **opts):
        qb.push(f" AND {predicate}")
    return qb


def build_where_clause_and_params(
    query: Any,
    *,
    paramstyle: str = "qmark",        # 'qmark' -> ?,  'pyformat' -> %(p1)s
    use_ilike: bool = False,
    quote_identifiers: bool = False,
    qualify_columns: bool = False,
    default_when_empty: str = "1=1",
    include_where_keyword: bool = True,
    param_name_prefix: str = "p",
    param_start_index: int = 1,
) -> Tuple[str, Params]:
    """
    Returns (where_sql, params) for the filters of a QueryFilter, a FilterSet
    or a single filter. Directives are ignored here.
    """
    qb = SqlQueryBuilder(paramstyle=paramstyle, prefix=param_name_prefix, start_index=param_start_index)
    target = query.inner if isinstance(query, QueryFilter) else query
    parts = filter_predicates(
        target,
        qb,
        use_ilike=use_ilike,
        quote_identifiers=quote_identifiers,
        qualify_columns=qualify_columns,
    ) if target is not None else []

    body = " AND ".join(parts) if parts else default_when_empty
    if not body:
        return "", qb.params
    where_sql = f"WHERE {body}" if include_where_keyword else body
    return where_sql, qb.params

# -----------------------------------------------------------------------------
# SELECT builder
# -----------------------------------------------------------------------------
def _normalize_columns(columns: Optional[Iterable[str]], *, quote_identifiers: bool) -> str:
    """
    Turn a list of column names into a SELECT list.
    - If empty -> '*'
    - Dotted identifiers are quoted segment-by-segment when quoting enabled.
    """
    cols = [c.strip() for c in (columns or []) if c.strip()]
    if not cols:
        return "*"
    out: List[str] = []
    for c in cols:
        if c == "*":
            out.append("*")
        else:
            out.append(_quote_dotted_identifier(c, quote_identifiers=quote_identifiers))
    return ", ".join(out)

@dataclass
class SelectBuildResult:
    sql: str
    params: Params
    count_sql: Optional[str] = None
    count_params: Optional[Params] = None

def build_select_from_query(
    table: str,
    query: QueryFilter,
    *,
    columns: Optional[Iterable[str]] = None,
    paramstyle: str = "qmark",
    use_ilike: bool = False,
    quote_identifiers: bool = False,
    qualify_columns: bool = False,
    distinct: bool = False,
    include_count: bool = False,
    limit_override: Optional[int] = None,
) -> SelectBuildResult:
    """
    Build a complete SELECT from a parsed QueryFilter.
    - FROM from `table` (supports db.schema.table)
    - WHERE from query.inner (parametrized)
    - ORDER BY from query.order_by
    - LIMIT/OFFSET from query.limit / query.skip (or `limit_override`)
    """
    if not table:
        raise ValueError("table is required")

    select_list = _normalize_columns(columns, quote_identifiers=quote_identifiers)
    distinct_kw = "DISTINCT " if distinct else ""
    from_name = _quote_dotted_identifier(table, quote_identifiers=quote_identifiers)

    qb = SqlQueryBuilder(f"SELECT {distinct_kw}{select_list} FROM {from_name}", paramstyle)
    opts = dict(quote_identifiers=quote_identifiers, qualify_columns=qualify_columns)
    predicates = filter_predicates(query.inner, qb, use_ilike=use_ilike, **opts) if query.inner is not None else []
    if predicates:
        qb.push(" WHERE " + " AND ".join(predicates))

    if query.order_by is not None:
        apply_filter(qb, query.order_by, **opts)

    limit = limit_override if limit_override is not None else (query.limit.value if query.limit else None)
    if limit is not None:
        apply_filter(qb, Limit(limit))
    if query.skip is not None:
        apply_filter(qb, query.skip)

    # Optional COUNT(*) mirror
    count_sql = None
    count_params = None
    if include_count:
        where_only, count_params = build_where_clause_and_params(
            query,
            paramstyle=paramstyle,
            use_ilike=use_ilike,
            include_where_keyword=False,
            default_when_empty="",  # mirror behavior
            **opts,
        )
        if where_only.strip():
            count_sql = f"SELECT COUNT(*) FROM {from_name} WHERE {where_only}"
        else:
            count_sql = f"SELECT COUNT(*) FROM {from_name}"

    return SelectBuildResult(sql=qb.sql, params=qb.params, count_sql=count_sql, count_params=count_params)

# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------
__all__ = [
    "SqlQueryBuilder",
    "SelectBuildResult",
    "apply_filter",
    "filter_predicates",
    "build_where_clause_and_params",
    "build_select_from_query",
]
