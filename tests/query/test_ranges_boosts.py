"""Tests for ranges and boosts."""

from datetime import date

import pytest

from lucenequery import InvalidBoostError, InvalidRangeError
from lucenequery.query.base import MAX_BOOST


class TestRanges:
    """Test inclusive ranges."""

    def test_numeric_range(self, query):
        """Numeric bounds render as-is."""
        query.add_range(1, 5)

        assert query.text == "[1 TO 5] "
        assert query.last_successful is True

    def test_range_field(self, query):
        """A mandatory field range is prefixed with +."""
        query.add_range_field("year", 2020, 2024, True)

        assert query.text == "+year:[2020 TO 2024] "

    def test_wildcarded_range(self, query, wildcarded):
        """Wildcarded bounds get a trailing *."""
        query.add_range("a", "c", wildcarded)

        assert query.text == "[a* TO c*] "

    def test_date_strings_escaped(self, query):
        """Bounds are escaped like values."""
        query.add_range("2020-01-01", "2020-12-31")

        assert query.text == r"[2020\-01\-01 TO 2020\-12\-31] "

    def test_date_objects(self, query):
        """Non-string bounds are rendered through str()."""
        query.add_range_field("published", date(2020, 1, 1), date(2020, 12, 31))

        assert query.text == r"published:[2020\-01\-01 TO 2020\-12\-31] "

    def test_equal_bounds(self, query):
        """A single-value range is valid."""
        query.add_range(3, 3)

        assert query.text == "[3 TO 3] "

    def test_inverted_numeric_bounds(self, query):
        """A lower bound above the upper bound matches nothing and is skipped."""
        query.add_argument("x")

        query.add_range(5, 1)

        assert query.text == "(x) "
        assert query.last_successful is False

    def test_inverted_field_bounds(self, query):
        """Inverted bounds on a field are skipped as well."""
        query.add_range_field("price", 5.5, 1.0)

        assert query.text == ""
        assert query.last_successful is False

    def test_inverted_strings_allowed(self, query):
        """Non-numeric bounds are not compared."""
        query.add_range("z", "a")

        assert query.text == "[z TO a] "

    @pytest.mark.parametrize("start, end", [(None, 1), (1, None), (None, None)])
    def test_missing_bounds(self, query, start, end):
        """Absent bounds are rejected."""
        with pytest.raises(InvalidRangeError) as exc_info:
            query.add_range(start, end)

        assert exc_info.value.start == start
        assert exc_info.value.end == end

    @pytest.mark.parametrize("start, end", [("", "b"), ("a", " ")])
    def test_blank_bounds_skipped(self, query, start, end):
        """Blank bounds leave nothing to search for."""
        query.add_range(start, end)
        query.add_range_field("name", start, end)

        assert query.text == ""
        assert query.last_successful is False

    def test_range_error_is_value_error(self, query):
        """Range errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            query.add_range_field("year", None, 2020)

    @pytest.mark.parametrize("key", [None, "", " "])
    def test_blank_key_skipped(self, query, key):
        """A blank field name appends nothing."""
        query.add_range_field(key, 1, 2)

        assert query.text == ""
        assert query.last_successful is False


class TestBoosts:
    """Test boosting the preceding clause."""

    @pytest.mark.parametrize(
        "factor, expected",
        [
            (2, "^2.0 "),
            (2.5, "^2.5 "),
            (2.345, "^2.34 "),
            (0.019, "^0.01 "),
            (9999999.999, "^9999999.99 "),
        ],
    )
    def test_boost_truncated(self, query, factor, expected):
        """Boosts are truncated to two decimals."""
        query.add_argument("x").add_boost(factor)

        assert query.text == "(x) " + expected

    def test_boost_of_one_omitted(self, query):
        """A neutral boost appends nothing."""
        query.add_argument("x").add_boost(1.0)

        assert query.text == "(x) "

    @pytest.mark.parametrize("factor", [0, -1, MAX_BOOST, MAX_BOOST + 1])
    def test_invalid_boost(self, query, factor):
        """Boosts outside (0, 10000000) are rejected."""
        with pytest.raises(InvalidBoostError) as exc_info:
            query.add_argument("x").add_boost(factor)

        assert exc_info.value.factor == factor
        assert query.text == "(x) "

    def test_boost_does_not_change_success(self, query):
        """Boosting keeps the outcome of the preceding call."""
        query.add_argument("x").add_boost(3)

        assert query.last_successful is True

    def test_boost_on_empty_query_skipped(self, query):
        """A boost with no clause in front of it appends nothing."""
        query.add_argument("").add_boost(2)

        assert query.text == ""

    def test_boost_after_skipped_argument(self, query):
        """A boost never attaches to an earlier clause."""
        query.add_argument("a").add_argument(None).add_boost(3)

        assert query.text == "(a) "

    def test_boost_after_skipped_field(self, query):
        """A boost after a field without value appends nothing."""
        query.add_field("title", "").add_boost(3)

        assert query.text == ""

    def test_boost_after_skipped_range(self, query):
        """A boost after an inverted range appends nothing."""
        query.add_range_field("year", 2024, 2020).add_boost(2)

        assert query.text == ""

    def test_boost_validated_after_skipped_call(self, query):
        """Invalid factors are rejected even when nothing would be appended."""
        query.add_argument(None)

        with pytest.raises(InvalidBoostError):
            query.add_boost(0)
