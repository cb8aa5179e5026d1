"""
Shared pytest fixtures for qsfilter tests.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import pytest

from qsfilter import (
    EqualFilter,
    FieldSpec,
    FilterKind,
    FilterSchema,
    NumberFilters,
    SchemaRegistry,
    StringFilters,
)

logging.basicConfig(level=logging.CRITICAL)


@dataclass(frozen=True)
class UserFilter:
    """Hand-written aggregate, parsed field by field."""

    name: StringFilters = StringFilters()
    age: NumberFilters = NumberFilters()
    active: EqualFilter = EqualFilter()

    @classmethod
    def parse(cls, raw_query: str) -> "UserFilter":
        return cls(
            name=StringFilters.parse("name", raw_query),
            age=NumberFilters.parse("age", raw_query, int),
            active=EqualFilter.parse("active", raw_query, bool),
        )

    @classmethod
    def filter_id(cls) -> Optional[str]:
        return None


@pytest.fixture
def user_filter():
    return UserFilter


@pytest.fixture
def users_schema():
    return FilterSchema(
        [
            FieldSpec("name", FilterKind.STRING),
            FieldSpec("age", FilterKind.NUMBER, int),
            FieldSpec("active", FilterKind.EQUAL, bool),
        ],
        name="users",
    )


@pytest.fixture
def scoped_schema():
    return FilterSchema(
        [
            FieldSpec("name", FilterKind.STRING, table="people", alias="n"),
            FieldSpec("age", FilterKind.NUMBER, int),
            FieldSpec("ignored", skip=True, default=str),
            FieldSpec("is_active", value_type=bool),
        ],
        table="users",
    )


@pytest.fixture
def registry(users_schema, scoped_schema):
    return SchemaRegistry.from_schemas(
        {"users": users_schema, "people": scoped_schema},
        max_limit=50,
    )
