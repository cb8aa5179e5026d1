from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .. import config
from ..errors import FilterParseError
from ..query import build_select_from_query
from ..schema import SchemaRegistry
from ..validation import assert_order_allowed, cap_limit
from .extract import decode_query, parse_request_query

log = logging.getLogger("qsfilter.web")


class SqlOut(BaseModel):
    """Generated statement for one entity query."""

    entity: str
    mappedView: str
    sql: str
    params: Any
    countSql: Optional[str] = None
    countParams: Any = None
    limitApplied: int
    maxLimit: int
    query: Dict[str, Any]


def create_app(registry: Optional[SchemaRegistry] = None) -> FastAPI:
    app = FastAPI(title="qsfilter query service", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    if registry is None:
        registry = SchemaRegistry()

        @app.on_event("startup")
        def _startup():
            registry.load()

    app.state.registry = registry

    def get_registry() -> SchemaRegistry:
        return app.state.registry

    @app.get("/healthz")
    def health(reg: SchemaRegistry = Depends(get_registry)):
        return {"ok": True, "entities": list(reg.entities.keys())}

    @app.get("/entities")
    def list_entities(reg: SchemaRegistry = Depends(get_registry)):
        out: List[Dict[str, Any]] = []
        for name, entry in reg.entities.items():
            out.append({
                "entity": name,
                "view": entry["view"],
                "maxLimit": entry["maxLimit"],
                "schema": entry["schema"].to_dict(),
            })
        return {"entities": out}

    @app.get("/entities/{entity}/sql", response_model=SqlOut)
    def build_query(
        entity: str,
        request: Request,
        paramstyle: str = config.DEFAULT_PARAMSTYLE,
        use_ilike: bool = False,
        quote_identifiers: bool = False,
        include_count: bool = False,
        reg: SchemaRegistry = Depends(get_registry),
    ):
        """
        Translate the request's bracket filters, e.g.
        /entities/users/sql?age[gte]=18&order_by[desc]=age&limit=10
        into a parametrized SELECT. Control parameters such as `paramstyle`
        share the query string and are ignored by the filter parser.
        """
        try:
            entry = reg.ensure_entity(entity)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=str(e))

        schema = entry["schema"]
        raw = request.url.query
        try:
            q = parse_request_query(decode_query(raw), schema)
            assert_order_allowed(entity, q.order_by, schema)
            limit = cap_limit(q.limit, entry["maxLimit"])
            res = build_select_from_query(
                entry["view"],
                q,
                paramstyle=paramstyle,
                use_ilike=use_ilike,
                quote_identifiers=quote_identifiers,
                include_count=include_count,
                limit_override=limit,
            )
        except (FilterParseError, ValueError) as e:
            log.info("rejected query for %s: %s", entity, e)
            raise HTTPException(status_code=400, detail=str(e))

        return {
            "entity": entity,
            "mappedView": entry["view"],
            "sql": res.sql,
            "params": res.params,
            "countSql": res.count_sql,
            "countParams": res.count_params,
            "limitApplied": limit,
            "maxLimit": entry["maxLimit"],
            "query": q.to_dict(),
        }

    @app.post("/reload")
    def reload_registry(reg: SchemaRegistry = Depends(get_registry)):
        try:
            summary = reg.reload()
            return {"reloaded": summary}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return app
