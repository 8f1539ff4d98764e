"""
Tests for payload validation helpers.
"""

import pytest

from validation import (
    INVALID_QUANTITY,
    MAX_QUANTITY,
    ORDER_FIELDS,
    FieldValidationError,
    parse_quantity,
    require_fields,
)


class TestRequireFields:

    def test_all_present(self):
        require_fields({"name": "Ana", "email": "ana@x.com"}, ("name", "email"), "missing")

    @pytest.mark.parametrize("value", [None, "", 0, [], {}])
    def test_falsy_value_rejected(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            require_fields({"name": value, "email": "ana@x.com"}, ("name", "email"), "missing")
        assert str(exc_info.value) == "missing"
        assert exc_info.value.reason == "missing_field"

    def test_whitespace_is_present(self):
        require_fields({"name": " ", "email": "ana@x.com"}, ("name", "email"), "missing")

    def test_absent_key_rejected(self):
        with pytest.raises(FieldValidationError):
            require_fields({"name": "Ana"}, ("name", "email"), "missing")

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            require_fields({}, ORDER_FIELDS, "missing")


class TestParseQuantity:

    @pytest.mark.parametrize("value,expected", [
        (1, 1),
        (42, 42),
        (3.0, 3),
        ("7", 7),
        (" 7 ", 7),
        ("2.0", 2),
        (MAX_QUANTITY, MAX_QUANTITY),
    ])
    def test_accepted(self, value, expected):
        result = parse_quantity(value)
        assert result == expected
        assert type(result) is int

    @pytest.mark.parametrize("value", [
        0, -1, 0.5, 2.5, "abc", "", "0", "-3", "1.5", "nan", "inf",
        True, False, None, [1], {"n": 1},
        MAX_QUANTITY + 1, 10**20, 1e20, "1e20",
    ])
    def test_rejected(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            parse_quantity(value)
        assert str(exc_info.value) == INVALID_QUANTITY
        assert exc_info.value.reason == "invalid_quantity"
