"""
Tests for document access, field extraction and type inference.
"""

import pytest

from docshape.core.document import document_body, get_field_value
from docshape.core.exceptions import ValidationError
from docshape.core.types import FieldType
from docshape.query.fields import extract_fields, extract_user_fields, is_internal_field
from docshape.query.inference import (
    detect_value_type,
    infer_field_type,
    infer_field_types,
    infer_type,
)


class TestDocumentAccess:
    """Document body and field lookup tests."""

    def test_unwraps_doc_rows(self):
        row = {"id": "x", "doc": {"name": "Ada"}}
        assert document_body(row) == {"name": "Ada"}
        assert get_field_value(row, "name") == "Ada"

    def test_plain_document(self):
        assert document_body({"name": "Ada"}) == {"name": "Ada"}

    def test_non_mapping_doc_key_is_a_field(self):
        document = {"doc": "a string field"}
        assert get_field_value(document, "doc") == "a string field"

    def test_non_mapping_document(self):
        assert document_body(["a"]) == {}
        assert get_field_value(None, "a") is None

    def test_missing_field(self):
        assert get_field_value({"a": 1}, "b") is None

    def test_dotted_path(self):
        document = {"user": {"address": {"city": "Oslo"}}, "tags": ["x", "y"]}
        assert get_field_value(document, "user.address.city") == "Oslo"
        assert get_field_value(document, "tags.1") == "y"
        assert get_field_value(document, "tags.5") is None
        assert get_field_value(document, "user.phone") is None

    def test_exact_key_wins_over_path(self):
        document = {"a.b": 1, "a": {"b": 2}}
        assert get_field_value(document, "a.b") == 1


class TestExtractFields:
    """Field extraction tests."""

    def test_union_sorted(self):
        documents = [{"b": 1, "a": 2}, {"c": 3}, {"a": None}]
        assert extract_fields(documents) == ["a", "b", "c"]

    def test_wrapped_rows(self, people, wrapped_people):
        assert extract_fields(wrapped_people) == extract_fields(people)

    def test_empty_collection(self):
        assert extract_fields([]) == []

    def test_top_level_only(self):
        assert extract_fields([{"user": {"name": "x"}}]) == ["user"]

    def test_none_collection(self):
        with pytest.raises(ValidationError):
            extract_fields(None)

    def test_user_fields_drop_internal(self, people):
        fields = extract_user_fields(people)
        assert "_id" not in fields
        assert "_rev" not in fields
        assert fields == ["active", "age", "city", "joined", "name"]

    def test_sample_size(self):
        documents = [{"a": 1}, {"b": 2}, {"c": 3}]
        assert extract_fields(documents, sample_size=2) == ["a", "b"]

    def test_internal_prefix(self):
        assert is_internal_field("_id")
        assert not is_internal_field("id")
        assert not is_internal_field("_id", prefix="")


class TestTypeInference:
    """Type inference tests."""

    def test_detect_value_type(self):
        assert detect_value_type(None) == FieldType.NULL
        assert detect_value_type([1]) == FieldType.ARRAY
        assert detect_value_type(True) == FieldType.BOOLEAN
        assert detect_value_type(1.5) == FieldType.NUMBER
        assert detect_value_type({"a": 1}) == FieldType.OBJECT
        assert detect_value_type("2024-01-01") == FieldType.DATE
        assert detect_value_type("hello") == FieldType.STRING

    def test_numbers_and_numeric_strings(self):
        assert infer_type([1, "2", 3.5]) == FieldType.NUMBER

    def test_booleans_are_not_numbers(self):
        assert infer_type([True, False]) == FieldType.BOOLEAN
        assert infer_type([True, 1]) == FieldType.STRING

    def test_dates(self):
        assert infer_type(["2024-01-01", "2024-02-01T10:00:00Z"]) == FieldType.DATE

    def test_date_needs_prefix(self):
        assert infer_type(["Jan 1 2024"]) == FieldType.STRING

    def test_arrays(self):
        assert infer_type([[1], ["a", "b"]]) == FieldType.ARRAY

    def test_mixed_is_string(self):
        assert infer_type([1, "abc"]) == FieldType.STRING

    def test_empty_and_nulls(self):
        assert infer_type([]) == FieldType.STRING
        assert infer_type([None, None]) == FieldType.STRING

    def test_nulls_are_skipped(self):
        assert infer_type([None, 5, None, 6]) == FieldType.NUMBER

    def test_sample_window(self):
        """Only the first N non-null values are inspected."""
        values = [1] * 10 + ["abc"]
        assert infer_type(values) == FieldType.NUMBER
        assert infer_type(values, sample_size=11) == FieldType.STRING

    def test_empty_string_is_not_numeric(self):
        assert infer_type([1, ""]) == FieldType.STRING

    def test_field_type(self, people):
        assert infer_field_type(people, "age") == FieldType.NUMBER
        assert infer_field_type(people, "active") == FieldType.BOOLEAN
        assert infer_field_type(people, "joined") == FieldType.DATE
        assert infer_field_type(people, "name") == FieldType.STRING
        assert infer_field_type(people, "missing") == FieldType.STRING

    def test_field_types(self, people):
        types = infer_field_types(people)
        assert types["age"] == FieldType.NUMBER
        assert list(types) == extract_fields(people)
