from __future__ import annotations
from typing import Any, Callable, List, Tuple
from urllib.parse import unquote
import logging

from fastapi import HTTPException, Request

from ..errors import FilterParseError
from ..filters import RawQuery, split_query
from ..query import Filterable, QueryFilter

log = logging.getLogger("qsfilter.web")


def decode_query(raw_query: str) -> List[Tuple[str, str]]:
    """
    Split a percent-encoded query component, then decode each key and value.
    Clients usually encode the brackets (age%5Bgte%5D=18) as well as any
    '&' or '=' inside a value (name[c]=Tom%26Jerry).
    Raises FilterStructureError.
    """
    return split_query(raw_query, unquote)


def parse_request_query(raw_query: RawQuery, inner: Filterable[Any]) -> QueryFilter[Any]:
    """
    Parse an already-decoded query component (or its decoded pairs).
    Raises FilterParseError.
    """
    return QueryFilter.parse(raw_query or "", inner)


def query_filter_dependency(inner: Filterable[Any]) -> Callable[[Request], QueryFilter[Any]]:
    """
    FastAPI dependency yielding a parsed QueryFilter; bad queries become 400s.

        @app.get("/users")
        def users(q: QueryFilter = Depends(query_filter_dependency(USERS))): ...
    """
    def _dep(request: Request) -> QueryFilter[Any]:
        raw = request.url.query
        try:
            return parse_request_query(decode_query(raw), inner)
        except FilterParseError as e:
            log.info("rejected query %r: %s", raw, e)
            raise HTTPException(status_code=400, detail=str(e))

    return _dep
