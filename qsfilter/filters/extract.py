from __future__ import annotations
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union
import logging

from ..errors import FilterStructureError, FilterValueError
from .grammar import parse_key
from .scalars import Converter, parse_str

log = logging.getLogger("qsfilter.extract")

DEFAULT_OPERATOR = "eq"

# a query string, or its segments already split into (key, value)
RawQuery = Union[str, Sequence[Tuple[str, str]]]


def split_query(raw_query: str, decode: Optional[Callable[[str], str]] = None) -> List[Tuple[str, str]]:
    """
    Split a query string into (key, value) pairs on '&' and the first '='.

    `decode` runs on each key and value after splitting, so a percent-encoded
    '&' or '=' inside a value stays part of that value:

        split_query("name[c]=Tom%26Jerry", unquote) -> [('name[c]', 'Tom&Jerry')]
    """
    if not raw_query:
        return []

    pairs: List[Tuple[str, str]] = []
    for segment in raw_query.split("&"):
        key, sep, raw_value = segment.partition("=")
        if not sep:
            raise FilterStructureError(f"missing '=' in {segment!r}")
        if decode is not None:
            key, raw_value = decode(key), decode(raw_value)
        pairs.append((key, raw_value))
    return pairs


def extract(
    target_id: str,
    raw_query: RawQuery,
    convert: Converter = parse_str,
) -> List[Tuple[str, Any]]:
    """
    Collect every (operator, value) pair addressed to `target_id`, in the
    order they appear in `raw_query`.

    'age[gte]=1&age[lt]=9&name=x' with target 'age' -> [('gte', 1), ('lt', 9)]

    Pairs for other fields are skipped, but every segment must still be well
    formed. Raises FilterStructureError / FilterValueError.
    """
    if not raw_query:
        return []

    segments = split_query(raw_query) if isinstance(raw_query, str) else raw_query
    pairs: List[Tuple[str, Any]] = []
    for key, raw_value in segments:
        parts = parse_key(key)
        if parts.name != target_id:
            continue

        op = parts.operator or DEFAULT_OPERATOR
        try:
            value = convert(raw_value)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise FilterValueError(f"invalid value for {key!r}: {raw_value!r}") from e

        log.debug("matched %s[%s]=%r", target_id, op, raw_value)
        pairs.append((op, value))
    return pairs


__all__ = ["DEFAULT_OPERATOR", "RawQuery", "extract", "split_query"]
