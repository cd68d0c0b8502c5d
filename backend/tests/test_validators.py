"""
Inkwell Backend — Validation Helper Tests
===========================================

What:  Tests for the field-level checks shared by both services.
"""

import pytest

from app.services.validators import (
    ROW_ID_MAX,
    coerce_int,
    is_blank,
    parse_page_param,
    parse_row_id,
    validate_article,
    validate_email_syntax,
)


class TestIsBlank:

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", 0, [], {}])
    def test_blank_values(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["a", " a ", 5, ["x"]])
    def test_present_values(self, value):
        assert is_blank(value) is False


class TestEmailSyntax:

    def test_valid_email(self):
        assert validate_email_syntax("a@x.com") is True

    def test_missing_at_sign(self):
        assert validate_email_syntax("not-an-email") is False

    def test_missing_domain(self):
        assert validate_email_syntax("someone@") is False

    def test_non_string(self):
        assert validate_email_syntax(42) is False


class TestValidateArticle:

    def test_valid_article_has_no_errors(self):
        assert validate_article({"title": "T", "content": "C", "user_id": 1}) is None

    def test_title_too_long(self):
        errors = validate_article({"title": "x" * 256, "content": "C"})
        assert errors == {"title": "Title must be at most 255 characters"}

    def test_non_string_fields_reported_together(self):
        errors = validate_article({"title": 12, "content": ["a"]})
        assert errors == {
            "title": "Title must be a string",
            "content": "Content must be a string",
        }


class TestCoerceInt:

    @pytest.mark.parametrize("value, expected", [
        (5, 5),
        ("5", 5),
        (" 7 ", 7),
        (3.0, 3),
        ("3.0", 3),
        ("-2", -2),
        ("1e3", 1000),
    ])
    def test_integers(self, value, expected):
        assert coerce_int(value) == expected

    @pytest.mark.parametrize("value", [
        "abc", 1.5, "1.5", True, None, [], "nan", "inf", "1_0", "١", "1e400",
    ])
    def test_non_integers(self, value):
        assert coerce_int(value) is None


class TestParsePageParam:

    def test_absent_uses_default(self):
        assert parse_page_param(None, 10) == 10

    def test_numeric(self):
        assert parse_page_param("3", 10) == 3

    def test_non_numeric_uses_default(self):
        assert parse_page_param("abc", 10) == 10

    @pytest.mark.parametrize("raw", ["0", "-4"])
    def test_below_one_uses_default(self, raw):
        assert parse_page_param(raw, 1) == 1

    def test_underscores_are_not_digits(self):
        assert parse_page_param("1_0", 5) == 5

    def test_huge_page_is_clamped(self):
        assert parse_page_param("3000000000", 1) == ROW_ID_MAX


class TestParseRowId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), (ROW_ID_MAX, ROW_ID_MAX)])
    def test_valid_ids(self, raw, expected):
        assert parse_row_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc", "1_0", "١", "1.0", "", "0", "-3",
        str(ROW_ID_MAX + 1), "99999999999999999999",
    ])
    def test_ids_no_row_can_have(self, raw):
        assert parse_row_id(raw) is None
