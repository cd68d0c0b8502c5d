"""
Inkwell Backend — Validation Helpers
======================================

What:  Small, side-effect free checks shared by the resource services.
Why:   The services decide the ORDER of checks and the resulting messages;
       the helpers only answer "is this value acceptable".

Helpers:
    is_blank:              missing, empty, or whitespace-only field
    validate_email_syntax: RFC-style syntax check via email-validator
    validate_article:      structural rules for title/content
    is_row_id / parse_row_id: URL path ids within the id column range
    coerce_int:            lenient integer parsing for JSON/body values
    parse_page_param:      query-string pagination parsing
"""

import re
from typing import Any, Dict, Optional

from email_validator import EmailNotValidError, validate_email

from app.config import settings

# Largest value the INTEGER id columns hold (PostgreSQL INTEGER is 32-bit)
ROW_ID_MAX = 2**31 - 1

# Bounded so int() never sees an oversized digit string
_INTEGER = re.compile(r"[+-]?[0-9]{1,19}", re.ASCII)
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?", re.ASCII)


def is_blank(value: Any) -> bool:
    """
    True for whitespace-only strings and for falsy values (None, 0, []).

    Truthy non-strings (5, ["x"]) are not blank; callers that need a
    string check the type themselves.
    """
    if isinstance(value, str):
        return value.strip() == ""
    return not value


def validate_email_syntax(value: str) -> bool:
    """
    Check email syntax only.

    Deliverability (DNS lookups) is not checked: it would make every
    create/update depend on the network.
    """
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_article(payload: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """
    Structural rules for an article body.

    Returns:
        None when the article is acceptable, otherwise a mapping of field
        name to message, e.g. {"title": "Title must be at most 255 characters"}.
    """
    errors: Dict[str, str] = {}

    title = payload.get("title")
    if not isinstance(title, str):
        errors["title"] = "Title must be a string"
    elif len(title) > settings.article_title_max_length:
        errors["title"] = (
            f"Title must be at most {settings.article_title_max_length} characters"
        )

    content = payload.get("content")
    if not isinstance(content, str):
        errors["content"] = "Content must be a string"
    elif len(content) > settings.article_content_max_length:
        errors["content"] = (
            f"Content must be at most {settings.article_content_max_length} characters"
        )

    return errors or None


def is_row_id(value: int) -> bool:
    """True when `value` fits the integer id columns and can name a row."""
    return 1 <= value <= ROW_ID_MAX


def parse_row_id(raw: Any) -> Optional[int]:
    """
    Parse an id taken from a URL path.

    Only plain ASCII digits are accepted ("1_0" and "١" are not ids).
    Values outside the id column range yield None as well: no row can
    carry them.
    """
    text = str(raw).strip()
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    return value if is_row_id(value) else None


def coerce_int(value: Any) -> Optional[int]:
    """
    Parse an integer out of a JSON value.

    Accepts ints, integral floats (3.0) and ASCII numeric strings ("3",
    " 3 ", "3.0", "1e3"). Booleans, fractions and anything else yield None.
    The result is not range checked; see is_row_id.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
        if not _DECIMAL.fullmatch(text):
            return None
        number = float(text)
        return int(number) if number.is_integer() else None
    return None


def parse_page_param(raw: Optional[str], default: int) -> int:
    """
    Parse `limit`/`page` from the query string.

    Absent, non-numeric, zero and negative values all fall back to the
    default. A zero limit or a negative offset would only ever produce an
    empty page or a driver error. Huge values are clamped to ROW_ID_MAX
    so the computed offset stays within a 64-bit integer.
    """
    if raw is None or not _INTEGER.fullmatch(raw.strip()):
        return default
    value = int(raw.strip())
    return min(value, ROW_ID_MAX) if value >= 1 else default
