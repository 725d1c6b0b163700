"""
Tests for value coercion and input validation helpers.
"""

import math
import pytest
from datetime import date, datetime, timezone

from docshape.core.exceptions import ValidationError
from docshape.utils.coercion import (
    coerce_boolean,
    coerce_date,
    coerce_integer,
    coerce_number,
    date_to_millis,
    to_text,
)
from docshape.utils.validation import (
    validate_documents,
    validate_page,
    validate_page_size,
    validate_query_id,
    validate_records,
)


class TestCoerceNumber:
    """Number coercion tests."""

    def test_numbers_pass_through(self):
        assert coerce_number(5) == 5
        assert coerce_number(2.5) == 2.5

    def test_numeric_strings(self):
        assert coerce_number("42") == 42
        assert isinstance(coerce_number("42"), int)
        assert coerce_number(" 3.5 ") == 3.5
        assert coerce_number("-7") == -7
        assert coerce_number("1e3") == 1000.0

    def test_rejects_non_numeric(self):
        """Booleans, blanks and garbage are not numbers."""
        assert coerce_number(True) is None
        assert coerce_number("") is None
        assert coerce_number("   ") is None
        assert coerce_number("abc") is None
        assert coerce_number("1_000") is None
        assert coerce_number(None) is None
        assert coerce_number([1]) is None

    def test_rejects_non_finite(self):
        assert coerce_number(math.nan) is None
        assert coerce_number(math.inf) is None
        assert coerce_number("NaN") is None
        assert coerce_number("inf") is None


class TestCoerceInteger:
    """Lenient integer parsing tests."""

    def test_leading_digits(self):
        assert coerce_integer("12abc") == 12
        assert coerce_integer("3.7") == 3
        assert coerce_integer(" -4") == -4

    def test_no_digits(self):
        assert coerce_integer("abc") is None
        assert coerce_integer("") is None
        assert coerce_integer(False) is None

    def test_numbers(self):
        assert coerce_integer(9) == 9
        assert coerce_integer(9.9) == 9
        assert coerce_integer(math.inf) is None


class TestCoerceBoolean:
    """Boolean coercion tests."""

    @pytest.mark.parametrize("text", ["true", "TRUE", "1", "yes", "On"])
    def test_true_strings(self, text):
        assert coerce_boolean(text) is True

    @pytest.mark.parametrize("text", ["false", "False", "0", "no", "off", ""])
    def test_false_strings(self, text):
        assert coerce_boolean(text) is False

    def test_default_for_unknown(self):
        assert coerce_boolean("maybe") is None
        assert coerce_boolean("maybe", default=False) is False
        assert coerce_boolean(None, default=True) is True

    def test_numbers(self):
        assert coerce_boolean(0) is False
        assert coerce_boolean(2) is True


class TestCoerceDate:
    """Date coercion tests."""

    def test_iso_date(self):
        parsed = coerce_date("2024-03-01")
        assert parsed == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        parsed = coerce_date("2024-03-01T10:00:00Z")
        assert parsed == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_requires_date_prefix(self):
        assert coerce_date("March 1, 2024") is None
        assert coerce_date("12345") is None

    def test_invalid_calendar_date(self):
        assert coerce_date("2024-13-45") is None

    def test_naive_values_are_utc(self):
        assert coerce_date(datetime(2024, 1, 1)).tzinfo == timezone.utc
        assert coerce_date(date(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_non_strings(self):
        assert coerce_date(20240101) is None
        assert coerce_date(None) is None

    def test_millis(self):
        assert date_to_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000.0


class TestToText:
    """Text conversion tests."""

    def test_scalars(self):
        assert to_text(None) == ""
        assert to_text(True) == "true"
        assert to_text(3.0) == "3"
        assert to_text(3.25) == "3.25"
        assert to_text(7) == "7"

    def test_containers(self):
        assert to_text(["a", 1, None]) == "a,1,"
        assert to_text({"a": 1}) == '{"a":1}'


class TestValidation:
    """Precondition validation tests."""

    def test_documents(self):
        assert validate_documents([]) == []
        with pytest.raises(ValidationError):
            validate_documents(None)
        with pytest.raises(ValidationError):
            validate_documents("not a list")
        with pytest.raises(ValidationError):
            validate_documents({"a": 1})
        with pytest.raises(ValidationError):
            validate_documents(42)

    def test_page(self):
        assert validate_page(1) == 1
        for bad in (0, -1, True, "1", 1.0):
            with pytest.raises(ValidationError):
                validate_page(bad)

    def test_page_size(self):
        assert validate_page_size(25) == 25
        with pytest.raises(ValidationError):
            validate_page_size(0)
        with pytest.raises(ValidationError):
            validate_page_size(10 ** 9)

    def test_query_id(self):
        assert validate_query_id("abc_123-x") == "abc_123-x"
        for bad in ("", "has space", "a" * 200, 5):
            with pytest.raises(ValidationError):
                validate_query_id(bad)

    def test_records(self):
        assert validate_records([{"a": 1}]) == [{"a": 1}]
        with pytest.raises(ValidationError):
            validate_records({"a": 1})
        with pytest.raises(ValidationError):
            validate_records([{"a": 1}, "x"])
        with pytest.raises(ValidationError):
            validate_records([{"id": "bad id!"}])

    def test_records_numeric_ids(self):
        assert validate_records([{"id": 1712345678901}]) == [{"id": 1712345678901}]
