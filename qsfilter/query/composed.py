from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar

from ..filters import Limit, OrderBy, RawQuery, Skip

T = TypeVar("T")


class Filterable(Protocol[T]):
    """
    Anything that can parse its own fields out of a query string and report
    the table it is scoped to (or None).
    """

    def parse(self, raw_query: RawQuery) -> T: ...

    def filter_id(self) -> Optional[str]: ...


@dataclass(frozen=True)
class QueryFilter(Generic[T]):
    """
    A fully parsed request: the caller's field filters plus the reserved
    order/limit/skip directives.
    """
    inner: Optional[T] = None
    order_by: Optional[OrderBy] = None
    limit: Optional[Limit] = None
    skip: Optional[Skip] = None

    @classmethod
    def parse(cls, raw_query: RawQuery, inner: Filterable[T]) -> "QueryFilter[T]":
        """
        Parse `raw_query` against `inner`. The order directive is scoped to
        `inner.filter_id()` when it declares one. The first error aborts.
        """
        prefix = inner.filter_id()
        if prefix is not None:
            order_by = OrderBy.parse_prefixed(prefix, raw_query)
        else:
            order_by = OrderBy.parse(raw_query)

        limit = Limit.parse(raw_query)
        skip = Skip.parse(raw_query)
        parsed = inner.parse(raw_query)

        return cls(inner=parsed, order_by=order_by, limit=limit, skip=skip)

    @classmethod
    def empty(cls) -> "QueryFilter[T]":
        return cls()

    @classmethod
    def from_inner(cls, inner: T) -> "QueryFilter[T]":
        return cls(inner=inner)

    def to_dict(self) -> Dict[str, Any]:
        to_dict = getattr(self.inner, "to_dict", None)
        return {
            "filters": to_dict() if callable(to_dict) else None,
            "orderBy": self.order_by.to_dict() if self.order_by else None,
            "limit": self.limit.value if self.limit else None,
            "skip": self.skip.value if self.skip else None,
        }


__all__ = ["Filterable", "QueryFilter"]
