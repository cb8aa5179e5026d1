#!/usr/bin/env python3
"""
Tests for the equality, number and string filter families.
"""

import pytest
from pydantic import BaseModel, ValidationError

from qsfilter import (
    EqualFilter,
    FilterId,
    FilterValueError,
    NumberFilter,
    NumberFilters,
    NumberOperator,
    StringFilter,
    StringFilters,
    StringOperator,
    UnknownFilterError,
)


class TestEqualFilter:
    """Test single-valued equality filters."""

    def test_parse(self):
        f = EqualFilter.parse("age", "age=20", int)
        assert f.value == 20
        assert f.id == FilterId("age")

    def test_missing_field(self):
        f = EqualFilter.parse("age", "height=20", int)
        assert f.value is None
        assert not f.is_set()
        assert f.pairs() == []

    def test_last_occurrence_wins(self):
        assert EqualFilter.parse("age", "age=1&age=2", int).value == 2

    def test_operator_code_is_ignored(self):
        assert EqualFilter.parse("active", "active[ne]=true", bool).value is True

    def test_bool_value_error(self):
        with pytest.raises(FilterValueError):
            EqualFilter.parse("active", "active=maybe", bool)

    def test_from_id_keeps_identifier(self):
        fid = FilterId("age", prefix="users", alias="a")
        f = EqualFilter.from_id(fid, "age=3", int)
        assert f.value == 3
        assert f.id is fid
        assert f.pairs() == [("eq", 3)]

    def test_default_is_empty(self):
        f = EqualFilter()
        assert f.value is None and f.id is None


class TestNumberFilters:
    """Test numeric comparison filters."""

    def test_decode_every_operator(self):
        for code in ("eq", "ne", "gt", "lt", "gte", "lte"):
            assert NumberFilter.decode(code, 1) == NumberFilter(NumberOperator(code), 1)

    def test_parse(self):
        f = NumberFilters.parse("age", "age[gte]=18&age[lt]=30&name=x")
        assert list(f) == [
            NumberFilter(NumberOperator.GTE, 18),
            NumberFilter(NumberOperator.LT, 30),
        ]
        assert f.pairs() == [("gte", 18), ("lt", 30)]
        assert len(f) == 2

    def test_float_values(self):
        f = NumberFilters.parse("price", "price[lte]=9.99", float)
        assert f.pairs() == [("lte", 9.99)]

    def test_unknown_operator(self):
        with pytest.raises(UnknownFilterError):
            NumberFilters.parse("age", "age[near]=1")

    def test_string_operator_on_number_is_unknown(self):
        with pytest.raises(UnknownFilterError):
            NumberFilters.parse("age", "age[sw]=1")

    def test_value_error(self):
        with pytest.raises(FilterValueError):
            NumberFilters.parse("age", "age[eq]=notanumber")

    def test_value_checked_before_operator(self):
        with pytest.raises(FilterValueError):
            NumberFilters.parse("age", "age[near]=x")

    def test_empty(self):
        f = NumberFilters.parse("age", "")
        assert len(f) == 0
        assert f.id == FilterId("age")


class TestNumberFilterFromString:
    """Test the single-string form, e.g. a request body field."""

    def test_operator_and_value(self):
        assert NumberFilter.from_string("gte=10") == NumberFilter(NumberOperator.GTE, 10)

    def test_bare_value_is_eq(self):
        assert NumberFilter.from_string("10") == NumberFilter(NumberOperator.EQ, 10)

    def test_value_type(self):
        assert NumberFilter.from_string("lt=2.5", float) == NumberFilter(NumberOperator.LT, 2.5)

    def test_unknown_operator(self):
        with pytest.raises(UnknownFilterError):
            NumberFilter.from_string("near=1")

    @pytest.mark.parametrize("text", ["gte=x", "x", "1=2=3", "gte="])
    def test_value_error(self, text):
        with pytest.raises(FilterValueError):
            NumberFilter.from_string(text)

    def test_model_field(self):
        class Body(BaseModel):
            age: NumberFilter

        assert Body(age="lte=65").age == NumberFilter(NumberOperator.LTE, 65)
        assert Body(age="7").age == NumberFilter(NumberOperator.EQ, 7)

    def test_model_field_errors(self):
        class Body(BaseModel):
            age: NumberFilter

        with pytest.raises(ValidationError):
            Body(age="near=1")
        with pytest.raises(ValidationError):
            Body(age=10)


class TestStringFilters:
    """Test string comparison filters."""

    @pytest.mark.parametrize("code,op", [
        ("eq", StringOperator.EQ),
        ("ne", StringOperator.NE),
        ("like", StringOperator.LIKE),
        ("l", StringOperator.LIKE),
        ("not_like", StringOperator.NOT_LIKE),
        ("nl", StringOperator.NOT_LIKE),
        ("starts_with", StringOperator.STARTS_WITH),
        ("sw", StringOperator.STARTS_WITH),
        ("ends_with", StringOperator.ENDS_WITH),
        ("ew", StringOperator.ENDS_WITH),
        ("contains", StringOperator.CONTAINS),
        ("c", StringOperator.CONTAINS),
    ])
    def test_decode(self, code, op):
        assert StringFilter.decode(code, "v") == StringFilter(op, "v")

    def test_parse(self):
        f = StringFilters.parse("name", "name[like]=john&name[ne]=doe")
        assert list(f) == [
            StringFilter(StringOperator.LIKE, "john"),
            StringFilter(StringOperator.NE, "doe"),
        ]

    def test_short_codes_emit_long_codes(self):
        f = StringFilters.parse("name", "name[sw]=Al&name[c]=ic")
        assert f.pairs() == [("starts_with", "Al"), ("contains", "ic")]

    def test_unknown_operator(self):
        with pytest.raises(UnknownFilterError):
            StringFilters.parse("name", "name[gt]=a")

    def test_to_dict(self):
        f = StringFilters.parse("name", "name=Bob")
        assert f.to_dict() == {
            "field": "name",
            "filters": [{"operator": "eq", "value": "Bob"}],
        }

    @pytest.mark.parametrize("code,op", [
        ("like", StringOperator.LIKE),
        ("not_like", StringOperator.NOT_LIKE),
        ("starts_with", StringOperator.STARTS_WITH),
        ("ends_with", StringOperator.ENDS_WITH),
        ("contains", StringOperator.CONTAINS),
    ])
    def test_parse_long_codes(self, code, op):
        f = StringFilters.parse("name", f"name[{code}]=Bob")
        assert list(f) == [StringFilter(op, "Bob")]
        assert f.pairs() == [(code, "Bob")]


class TestStringFilterFromString:
    """Test the single-string form of a string filter."""

    def test_operator_and_value(self):
        assert StringFilter.from_string("like=john") == StringFilter(StringOperator.LIKE, "john")

    def test_short_code(self):
        assert StringFilter.from_string("sw=Al") == StringFilter(StringOperator.STARTS_WITH, "Al")

    def test_bare_value_is_eq(self):
        assert StringFilter.from_string("john") == StringFilter(StringOperator.EQ, "john")

    def test_more_than_one_equals_is_eq_of_whole_text(self):
        assert StringFilter.from_string("a=b=c") == StringFilter(StringOperator.EQ, "a=b=c")

    def test_unknown_operator(self):
        with pytest.raises(UnknownFilterError):
            StringFilter.from_string("gt=a")

    def test_model_field(self):
        class Body(BaseModel):
            name: StringFilter

        assert Body(name="not_like=x%").name == StringFilter(StringOperator.NOT_LIKE, "x%")
