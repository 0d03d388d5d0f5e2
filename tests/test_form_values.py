"""Tests for typed form submission values."""
from datetime import date

import pytest

from shiftgen.errors import ValidationError
from shiftgen.forms.values import (
    BooleanValue,
    DateValue,
    FieldType,
    FileValue,
    NumberValue,
    TextValue,
    UrlValue,
    resolve_submission,
    resolve_value,
)


class TestResolveValue:
    @pytest.mark.parametrize("field_type, raw, expected", [
        ("text", "hello", TextValue("hello")),
        ("number", "42", NumberValue(42.0)),
        ("date", "2024-06-05", DateValue(date(2024, 6, 5))),
        ("url", "https://example.com/a", UrlValue("https://example.com/a")),
        ("checkbox", "on", BooleanValue(True)),
        ("checkbox", "", BooleanValue(False)),
        ("file", "uploads/cv.pdf", FileValue("uploads/cv.pdf")),
    ])
    def test_typed_by_declared_type(self, field_type, raw, expected):
        value = resolve_value(field_type, raw)
        assert value == expected
        assert value.kind is FieldType(field_type)

    def test_url_looking_text_stays_text(self):
        """A text field holding a URL is still text."""
        assert resolve_value(FieldType.TEXT, "https://example.com") == TextValue("https://example.com")

    @pytest.mark.parametrize("field_type, raw", [
        ("number", "abc"),
        ("number", True),
        ("date", "05/06/2024"),
        ("url", "example.com"),
        ("url", "ftp://example.com"),
        ("checkbox", "maybe"),
        ("file", ""),
    ])
    def test_mismatch_rejected(self, field_type, raw):
        with pytest.raises(ValidationError):
            resolve_value(field_type, raw)

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown field type"):
            resolve_value("colour", "red")


class TestStorage:
    def test_to_storage(self):
        assert NumberValue(3.0).to_storage() == 3
        assert NumberValue(2.5).to_storage() == 2.5
        assert DateValue(date(2024, 6, 5)).to_storage() == "2024-06-05"
        assert BooleanValue(False).to_storage() is False


class TestResolveSubmission:
    def test_submission(self):
        fields = {"name": "text", "age": "number", "site": "url"}
        values = resolve_submission(fields, {"name": "Alice", "age": "30", "site": "http://a.io"})

        assert values["age"] == NumberValue(30.0)
        assert {k: v.to_storage() for k, v in values.items()} == {
            "name": "Alice", "age": 30, "site": "http://a.io",
        }

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="colour"):
            resolve_submission({"name": "text"}, {"name": "x", "colour": "red"})
