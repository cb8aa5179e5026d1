#!/usr/bin/env python3
"""
Tests for the multi-value extractor and scalar conversion.
"""

from datetime import date
from decimal import Decimal
from urllib.parse import unquote

import pytest

from qsfilter import FilterStructureError, FilterValueError, extract, split_query
from qsfilter.filters import converter_for
from qsfilter.filters.scalars import parse_int


class TestExtract:
    """Test extraction of (operator, value) pairs for one field."""

    def test_empty_query(self):
        assert extract("age", "") == []

    def test_basic(self):
        res = extract("age", "age[eq]=10&age[lt]=20", parse_int)
        assert res == [("eq", 10), ("lt", 20)]

    def test_order_is_preserved(self):
        assert extract("age", "age[gte]=1&age[lt]=9", parse_int) == [("gte", 1), ("lt", 9)]
        assert extract("age", "age[lt]=9&age[gte]=1", parse_int) == [("lt", 9), ("gte", 1)]

    def test_default_operator(self):
        assert extract("age", "age=10", parse_int) == extract("age", "age[eq]=10", parse_int)
        assert extract("age", "age=10", parse_int) == [("eq", 10)]

    def test_duplicates_are_kept(self):
        assert extract("age", "age=1&age=2", parse_int) == [("eq", 1), ("eq", 2)]

    def test_other_ids_are_ignored(self):
        res = extract("age", "age[eq]=10&height[eq]=20", parse_int)
        assert res == [("eq", 10)]

    @pytest.mark.parametrize("query", [
        "height=20",
        "name[sw]=Al&limit=10",
        "ages=1&agee[eq]=2",
        "order_by[asc]=age",
    ])
    def test_non_matching_field_yields_nothing(self, query):
        assert extract("age", query, parse_int) == []

    def test_index_segment_is_accepted(self):
        assert extract("age", "age[eq][3]=7", parse_int) == [("eq", 7)]

    def test_values_stay_raw_strings_by_default(self):
        assert extract("name", "name[like]=a%25b") == [("like", "a%25b")]

    def test_value_may_contain_equals_sign(self):
        assert extract("expr", "expr=a=b") == [("eq", "a=b")]

    def test_empty_value(self):
        assert extract("name", "name=") == [("eq", "")]

    def test_missing_equals_is_structural_error(self):
        with pytest.raises(FilterStructureError):
            extract("age", "age")

    def test_malformed_segment_for_other_field_still_fails(self):
        with pytest.raises(FilterStructureError):
            extract("age", "age=1&height")

    def test_bad_key_is_structural_error(self):
        with pytest.raises(FilterStructureError):
            extract("age", "[eq]=1")

    def test_empty_segment_is_structural_error(self):
        with pytest.raises(FilterStructureError):
            extract("age", "age=1&")

    def test_bad_value_is_value_error(self):
        with pytest.raises(FilterValueError):
            extract("age", "age[eq]=notanumber", parse_int)

    def test_bad_value_for_other_field_is_ignored(self):
        assert extract("age", "height=tall&age=3", parse_int) == [("eq", 3)]

    def test_long_operator_codes_are_kept(self):
        assert extract("name", "name[not_like]=a&name[starts_with]=b") == [("not_like", "a"), ("starts_with", "b")]

    def test_pre_split_pairs(self):
        pairs = [("name[c]", "Tom&Jerry"), ("age", "3")]
        assert extract("name", pairs) == [("c", "Tom&Jerry")]
        assert extract("age", pairs, parse_int) == [("eq", 3)]

    def test_pre_split_pairs_still_check_keys(self):
        with pytest.raises(FilterStructureError):
            extract("age", [("age[gte]x", "1")])


class TestSplitQuery:
    """Test splitting a query string into key/value pairs."""

    def test_split(self):
        assert split_query("a=1&b[gt]=2&c=x=y") == [("a", "1"), ("b[gt]", "2"), ("c", "x=y")]

    def test_no_decoding_by_default(self):
        assert split_query("name=Tom%26Jerry") == [("name", "Tom%26Jerry")]

    def test_decode_runs_after_splitting(self):
        assert split_query("n%5Bc%5D=a%26b", unquote) == [("n[c]", "a&b")]

    def test_missing_equals(self):
        with pytest.raises(FilterStructureError):
            split_query("a=1&b")


class TestConverters:
    """Test strict scalar parsers."""

    def test_int(self):
        conv = converter_for(int)
        assert conv("42") == 42
        assert conv("-7") == -7
        for bad in ("4.2", " 4", "1_000", ""):
            with pytest.raises(ValueError):
                conv(bad)

    def test_bool(self):
        conv = converter_for(bool)
        assert conv("true") is True
        assert conv("false") is False
        with pytest.raises(ValueError):
            conv("yes")

    def test_float_and_decimal(self):
        assert converter_for(float)("1.5") == 1.5
        assert converter_for("decimal")("10.25") == Decimal("10.25")
        with pytest.raises(ValueError):
            converter_for(float)("1_0")
        with pytest.raises(ValueError):
            converter_for(Decimal)("ten")

    def test_date(self):
        assert converter_for("date")("2024-02-29") == date(2024, 2, 29)

    def test_custom_callable(self):
        conv = converter_for(lambda raw: raw.upper())
        assert conv("abc") == "ABC"

    def test_unknown_type_name(self):
        with pytest.raises(ValueError):
            converter_for("complex")
