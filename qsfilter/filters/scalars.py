from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict
import re

Converter = Callable[[str], Any]

_INT_RE = re.compile(r"[+-]?\d+")
_UNSIGNED_RE = re.compile(r"\+?\d+")


def parse_int(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"not an integer: {raw!r}")
    return int(raw)


def parse_unsigned(raw: str) -> int:
    if not _UNSIGNED_RE.fullmatch(raw):
        raise ValueError(f"not an unsigned integer: {raw!r}")
    return int(raw)


def parse_float(raw: str) -> float:
    # float() tolerates surrounding whitespace and digit underscores
    if raw != raw.strip() or "_" in raw:
        raise ValueError(f"not a number: {raw!r}")
    return float(raw)


def parse_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"not a decimal: {raw!r}")


def parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def parse_str(raw: str) -> str:
    return raw


_CONVERTERS: Dict[Any, Converter] = {
    str: parse_str,
    int: parse_int,
    float: parse_float,
    Decimal: parse_decimal,
    bool: parse_bool,
    date: date.fromisoformat,
    datetime: datetime.fromisoformat,
}

TYPE_NAMES: Dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "decimal": Decimal,
    "bool": bool,
    "date": date,
    "datetime": datetime,
}


def converter_for(value_type: Any) -> Converter:
    """
    Return the strict text parser for a scalar type. Known types get a strict
    parser; any other callable (e.g. uuid.UUID) is used as-is.
    """
    if isinstance(value_type, str):
        try:
            value_type = TYPE_NAMES[value_type]
        except KeyError:
            raise ValueError(f"Unknown value type: {value_type}")
    conv = _CONVERTERS.get(value_type)
    if conv is not None:
        return conv
    if callable(value_type):
        return value_type
    raise TypeError(f"Cannot convert query values to {value_type!r}")


__all__ = [
    "Converter",
    "TYPE_NAMES",
    "converter_for",
    "parse_bool",
    "parse_decimal",
    "parse_float",
    "parse_int",
    "parse_str",
    "parse_unsigned",
]
