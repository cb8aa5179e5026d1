# Filter variant families: equality, numeric comparison, string comparison.
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..errors import FilterValueError, UnknownFilterError
from .extract import RawQuery, extract
from .identifier import FilterId
from .scalars import converter_for

V = TypeVar("V")
F = TypeVar("F")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class NumberOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"


class StringOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LIKE = "like"
    NOT_LIKE = "not_like"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    CONTAINS = "contains"


_NUMBER_CODES: Dict[str, NumberOperator] = {op.value: op for op in NumberOperator}

_STRING_CODES: Dict[str, StringOperator] = {
    **{op.value: op for op in StringOperator},
    "l": StringOperator.LIKE,
    "nl": StringOperator.NOT_LIKE,
    "sw": StringOperator.STARTS_WITH,
    "ew": StringOperator.ENDS_WITH,
    "c": StringOperator.CONTAINS,
}


def _collect(
    decode: Callable[[str, Any], F],
    filter_id: FilterId,
    raw_query: RawQuery,
    value_type: Any,
) -> List[F]:
    convert = converter_for(value_type)
    return [decode(code, value) for code, value in extract(filter_id.lookup_key, raw_query, convert)]


def _from_string(decode: Callable[[str, Any], F], text: str, value_type: Any) -> F:
    # "gte=10" -> decode("gte", 10); anything without exactly one '=' is an eq value
    convert = converter_for(value_type)
    parts = text.split("=")
    code, raw_value = (parts[0], parts[1]) if len(parts) == 2 else ("eq", text)
    try:
        value = convert(raw_value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise FilterValueError(f"invalid value: {raw_value!r}") from e
    return decode(code, value)


def _string_schema(cls: Any, source_type: Any, default_type: Any) -> core_schema.CoreSchema:
    args = get_args(source_type)
    value_type = args[0] if args else default_type

    def validate(value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {type(value).__name__}")
        return cls.from_string(value, value_type)

    return core_schema.no_info_plain_validator_function(validate)

# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EqualFilter(Generic[V]):
    """
    "field equals exactly one value". The operator code is ignored, so any
    `field[xx]=v` counts; when the field repeats, the last value wins.
    """
    value: Optional[V] = None
    id: Optional[FilterId] = None

    @classmethod
    def decode(cls, code: str, value: V) -> "EqualFilter[V]":
        return cls(value)

    @classmethod
    def parse(cls, target_id: str, raw_query: RawQuery, value_type: Any = str) -> "EqualFilter[V]":
        return cls.from_id(FilterId(target_id), raw_query, value_type)

    @classmethod
    def from_id(cls, filter_id: FilterId, raw_query: RawQuery, value_type: Any = str) -> "EqualFilter[V]":
        found = _collect(cls.decode, filter_id, raw_query, value_type)
        value = found[-1].value if found else None
        return cls(value, filter_id)

    def is_set(self) -> bool:
        return self.value is not None

    def pairs(self) -> List[Tuple[str, V]]:
        if self.value is None:
            return []
        return [("eq", self.value)]

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.id.key if self.id else None, "value": self.value}

# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberFilter(Generic[V]):
    op: NumberOperator
    value: V

    @classmethod
    def decode(cls, code: str, value: V) -> "NumberFilter[V]":
        op = _NUMBER_CODES.get(code)
        if op is None:
            raise UnknownFilterError(f"unknown number filter: {code!r}")
        return cls(op, value)

    @classmethod
    def from_string(cls, text: str, value_type: Any = int) -> "NumberFilter[V]":
        """
        Read the single-string form used in request bodies:

            "gte=10" -> NumberFilter(GTE, 10)
            "10"     -> NumberFilter(EQ, 10)

        Raises FilterValueError / UnknownFilterError.
        """
        return _from_string(cls.decode, text, value_type)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return _string_schema(cls, source_type, int)


@dataclass(frozen=True)
class NumberFilters(Generic[V]):
    """
    Ordered numeric comparisons on one field, e.g. 'age[gte]=18&age[lt]=30'.
    """
    filters: Tuple[NumberFilter[V], ...] = ()
    id: Optional[FilterId] = None

    @classmethod
    def parse(cls, target_id: str, raw_query: RawQuery, value_type: Any = int) -> "NumberFilters[V]":
        return cls.from_id(FilterId(target_id), raw_query, value_type)

    @classmethod
    def from_id(cls, filter_id: FilterId, raw_query: RawQuery, value_type: Any = int) -> "NumberFilters[V]":
        found = _collect(NumberFilter.decode, filter_id, raw_query, value_type)
        return cls(tuple(found), filter_id)

    def __iter__(self) -> Iterator[NumberFilter[V]]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def pairs(self) -> List[Tuple[str, V]]:
        return [(f.op.value, f.value) for f in self.filters]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.id.key if self.id else None,
            "filters": [{"operator": op, "value": v} for op, v in self.pairs()],
        }

# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StringFilter(Generic[V]):
    op: StringOperator
    value: V

    @classmethod
    def decode(cls, code: str, value: V) -> "StringFilter[V]":
        """Accepts long codes and their short forms: l, nl, sw, ew, c."""
        op = _STRING_CODES.get(code)
        if op is None:
            raise UnknownFilterError(f"unknown string filter: {code!r}")
        return cls(op, value)

    @classmethod
    def from_string(cls, text: str, value_type: Any = str) -> "StringFilter[V]":
        """"like=john" -> Like; "john" or "a=b=c" -> Eq of the whole text."""
        return _from_string(cls.decode, text, value_type)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return _string_schema(cls, source_type, str)


@dataclass(frozen=True)
class StringFilters(Generic[V]):
    """
    Ordered string comparisons on one field, e.g. 'name[sw]=Al&name[ne]=Alice'.
    """
    filters: Tuple[StringFilter[V], ...] = ()
    id: Optional[FilterId] = None

    @classmethod
    def parse(cls, target_id: str, raw_query: RawQuery, value_type: Any = str) -> "StringFilters[V]":
        return cls.from_id(FilterId(target_id), raw_query, value_type)

    @classmethod
    def from_id(cls, filter_id: FilterId, raw_query: RawQuery, value_type: Any = str) -> "StringFilters[V]":
        found = _collect(StringFilter.decode, filter_id, raw_query, value_type)
        return cls(tuple(found), filter_id)

    def __iter__(self) -> Iterator[StringFilter[V]]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def pairs(self) -> List[Tuple[str, V]]:
        return [(f.op.value, f.value) for f in self.filters]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.id.key if self.id else None,
            "filters": [{"operator": op, "value": v} for op, v in self.pairs()],
        }


__all__ = [
    "NumberOperator",
    "StringOperator",
    "EqualFilter",
    "NumberFilter",
    "NumberFilters",
    "StringFilter",
    "StringFilters",
]
