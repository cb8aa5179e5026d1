from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FilterId:
    """
    Where a filter's data lives in the query string and what it is called
    when predicates are emitted.

      - FilterId("age")                          -> bare
      - FilterId("age", prefix="users")          -> scoped to a table
      - FilterId("age", prefix="users", alias="a") -> scoped, emitted as 'a'

    `name` is always the query-string lookup key. `prefix` only qualifies the
    emitted column.
    """
    name: str
    prefix: Optional[str] = None
    alias: Optional[str] = None

    def __post_init__(self) -> None:
        if self.alias is not None and self.prefix is None:
            raise ValueError("an aliased FilterId requires a prefix")

    @property
    def kind(self) -> str:
        if self.prefix is None:
            return "bare"
        if self.alias is None:
            return "prefixed"
        return "prefixed_aliased"

    @property
    def lookup_key(self) -> str:
        return self.name

    @property
    def key(self) -> str:
        """Emission name: the alias when present, else the field name."""
        return self.alias if self.alias is not None else self.name

    @property
    def qualified_key(self) -> str:
        return f"{self.prefix}.{self.key}" if self.prefix else self.key

    def with_prefix(self, prefix: str) -> "FilterId":
        if self.prefix is not None:
            raise RuntimeError(
                f"FilterId {self.name!r} is already scoped to {self.prefix!r}"
            )
        return FilterId(self.name, prefix=prefix)

    def __str__(self) -> str:
        return self.qualified_key


__all__ = ["FilterId"]
