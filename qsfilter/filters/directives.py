"""
Reserved, single-valued query controls: `order_by`, `limit` and `skip`.

Only the first occurrence of each is used; later ones are ignored.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import UnknownFilterError
from .extract import RawQuery, extract
from .identifier import FilterId
from .scalars import parse_str, parse_unsigned

ORDER_BY_KEY = "order_by"
LIMIT_KEY = "limit"
SKIP_KEY = "skip"


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderBy:
    """
    Parsed from `order_by[asc]=field` or `order_by[desc]=field`.
    """
    direction: Direction
    id: FilterId

    @classmethod
    def decode(cls, code: str, value: str) -> "OrderBy":
        try:
            direction = Direction(code)
        except ValueError:
            raise UnknownFilterError(f"unknown order direction: {code!r}")
        return cls(direction, FilterId(value))

    @classmethod
    def parse(cls, raw_query: RawQuery) -> Optional["OrderBy"]:
        found = extract(ORDER_BY_KEY, raw_query, parse_str)
        if not found:
            return None
        code, value = found[0]
        return cls.decode(code, value)

    @classmethod
    def parse_prefixed(cls, prefix: str, raw_query: RawQuery) -> Optional["OrderBy"]:
        order = cls.parse(raw_query)
        return order.with_prefix(prefix) if order is not None else None

    def with_prefix(self, prefix: str) -> "OrderBy":
        """Scope a freshly parsed (bare) order to a table."""
        return OrderBy(self.direction, self.id.with_prefix(prefix))

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.id.key, "direction": self.direction.value}


@dataclass(frozen=True)
class Limit:
    value: int

    @classmethod
    def parse(cls, raw_query: RawQuery) -> Optional["Limit"]:
        found = extract(LIMIT_KEY, raw_query, parse_unsigned)
        return cls(found[0][1]) if found else None


@dataclass(frozen=True)
class Skip:
    value: int

    @classmethod
    def parse(cls, raw_query: RawQuery) -> Optional["Skip"]:
        found = extract(SKIP_KEY, raw_query, parse_unsigned)
        return cls(found[0][1]) if found else None


__all__ = [
    "ORDER_BY_KEY",
    "LIMIT_KEY",
    "SKIP_KEY",
    "Direction",
    "OrderBy",
    "Limit",
    "Skip",
]
