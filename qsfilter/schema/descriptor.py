# Explicit schema description: which fields a query may filter on and how.
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence
import copy
import logging

import jsonschema

from ..filters import (
    EqualFilter,
    FilterId,
    RawQuery,
    NumberFilters,
    StringFilters,
    TYPE_NAMES,
)

log = logging.getLogger("qsfilter.schema")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FilterKind(str, Enum):
    EQUAL = "equal"      # also the passthrough kind for any other scalar
    NUMBER = "number"
    STRING = "string"


_FAMILIES = {
    FilterKind.EQUAL: EqualFilter,
    FilterKind.NUMBER: NumberFilters,
    FilterKind.STRING: StringFilters,
}

_DEFAULT_VALUE_TYPES = {
    FilterKind.EQUAL: str,
    FilterKind.NUMBER: int,
    FilterKind.STRING: str,
}

# ---------------------------------------------------------------------------
# Field descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldSpec:
    """
    One filterable field.

    - `table` overrides the scope the field is emitted under.
    - `alias` is the emitted column name; it only applies together with `table`.
    - `skip` excludes the field from parsing; it is populated with `default`
      (called first when callable).
    """
    name: str
    kind: FilterKind = FilterKind.EQUAL
    value_type: Any = None
    table: Optional[str] = None
    alias: Optional[str] = None
    skip: bool = False
    default: Any = None

    def resolved_value_type(self) -> Any:
        if self.value_type is None:
            return _DEFAULT_VALUE_TYPES[FilterKind(self.kind)]
        if isinstance(self.value_type, str):
            return TYPE_NAMES[self.value_type]
        return self.value_type

    def to_dict(self) -> Dict[str, Any]:
        vt = self.resolved_value_type()
        type_name = next((k for k, v in TYPE_NAMES.items() if v is vt), getattr(vt, "__name__", str(vt)))
        return {
            "name": self.name,
            "kind": FilterKind(self.kind).value,
            "valueType": type_name,
            "table": self.table,
            "alias": self.alias,
            "skip": self.skip,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldSpec":
        return cls(
            name=data["name"],
            kind=FilterKind(data.get("kind", FilterKind.EQUAL.value)),
            value_type=data.get("valueType"),
            table=data.get("table"),
            alias=data.get("alias"),
            skip=bool(data.get("skip", False)),
            default=data.get("default"),
        )


class FilterSet(Mapping[str, Any]):
    """
    Read-only result of FilterSchema.parse: field name -> parsed filter, in
    declaration order. Fields are also reachable as attributes.
    """

    def __init__(self, values: Dict[str, Any]):
        self._values = dict(values)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__["_values"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"FilterSet({self._values!r})"

    def filters(self) -> List[Any]:
        """Parsed filter objects only; skipped fields' defaults are left out."""
        return [v for v in self._values.values() if isinstance(v, (EqualFilter, NumberFilters, StringFilters))]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, value in self._values.items():
            to_dict = getattr(value, "to_dict", None)
            out[name] = to_dict() if callable(to_dict) else value
        return out

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FilterSchema:
    """
    A declared list of fields plus an optional table scope. Parsing walks the
    fields in order, so the first malformed pair aborts the whole parse.

        users = FilterSchema(
            [
                FieldSpec("name", FilterKind.STRING),
                FieldSpec("age", FilterKind.NUMBER, int),
                FieldSpec("active", value_type=bool),
            ],
            table="users",
        )
        users.parse("name[sw]=Al&age[gte]=18").age
    """
    fields: Sequence[FieldSpec] = field(default_factory=tuple)
    table: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        seen = set()
        for spec in self.fields:
            if spec.name in seen:
                raise ValueError(f"Duplicate field in schema: {spec.name}")
            seen.add(spec.name)
            if spec.alias and not spec.table:
                log.warning("alias %r on field %r has no effect without a table override", spec.alias, spec.name)

    def filter_id(self) -> Optional[str]:
        return self.table

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def field_id(self, spec: FieldSpec) -> FilterId:
        if spec.table is None:
            return FilterId(spec.name)
        return FilterId(spec.name, prefix=spec.table, alias=spec.alias)

    def parse(self, raw_query: RawQuery) -> FilterSet:
        values: Dict[str, Any] = {}
        for spec in self.fields:
            if spec.skip:
                # each parse gets its own copy of a mutable default
                values[spec.name] = spec.default() if callable(spec.default) else copy.deepcopy(spec.default)
                continue
            family = _FAMILIES[FilterKind(spec.kind)]
            values[spec.name] = family.from_id(self.field_id(spec), raw_query, spec.resolved_value_type())
        return FilterSet(values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "table": self.table,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, name: Optional[str] = None, validate: bool = True) -> "FilterSchema":
        """
        Build a schema from a camelCase JSON/YAML document:

            {"table": "users", "fields": [{"name": "age", "kind": "number", "valueType": "int"}]}
        """
        if validate:
            jsonschema.validate(instance=data, schema=SCHEMA_DOCUMENT_SCHEMA)
        return cls(
            fields=[FieldSpec.from_dict(f) for f in data.get("fields", [])],
            table=data.get("table"),
            name=name or data.get("name"),
        )

# ---------------------------------------------------------------------------
# JSON Schema for schema documents
# ---------------------------------------------------------------------------

SCHEMA_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Filter Schema",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "table": {"type": "string", "minLength": 1},
        "view": {"type": "string", "minLength": 1},
        "maxLimit": {"type": "integer", "minimum": 0},
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "pattern": r"^\w+$"},
                    "kind": {"type": "string", "enum": [k.value for k in FilterKind]},
                    "valueType": {"type": "string", "enum": list(TYPE_NAMES)},
                    "table": {"type": "string", "minLength": 1},
                    "alias": {"type": "string", "minLength": 1},
                    "skip": {"type": "boolean"},
                    "default": {},
                },
                "required": ["name"],
            },
        },
    },
    "required": ["fields"],
}


__all__ = [
    "FilterKind",
    "FieldSpec",
    "FilterSet",
    "FilterSchema",
    "SCHEMA_DOCUMENT_SCHEMA",
]
