from __future__ import annotations
from typing import NamedTuple, Optional
import re

from ..errors import FilterStructureError

# name[op][index]; op is lowercase alpha or '_', index is digits and currently inert
_QUERY_KEY_RE = re.compile(r"(\w+)(\[([a-z_]+)\])?(\[(\d+)\])?")


class KeyParts(NamedTuple):
    name: str
    operator: Optional[str] = None
    index: Optional[str] = None


def parse_key(token: str) -> KeyParts:
    """
    Split the left side of a `key=value` pair into its parts.

      - 'age'              -> ('age', None, None)
      - 'age[gte]'         -> ('age', 'gte', None)
      - 'age[eq][3]'       -> ('age', 'eq', '3')
      - 'name[not_like]'   -> ('name', 'not_like', None)

    The whole token must match; anything left over is a structural error.
    """
    m = _QUERY_KEY_RE.fullmatch(token)
    if m is None:
        raise FilterStructureError(f"invalid filter structure: {token!r}")
    return KeyParts(m.group(1), m.group(3), m.group(5))


__all__ = ["KeyParts", "parse_key"]
