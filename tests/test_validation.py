"""
Tests for the input validator: emptiness, markup, SQL keyword and URI scheme
checks, ordering, and the trim-only sanitisation.

Run with: pytest tests/test_validation.py -v
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from secure_api.schemas import InputError, ValidationResult
from secure_api.validation import validate_user_input


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------

def test_empty_input_is_required():
    r = validate_user_input("")
    assert r == ValidationResult(is_valid=False, sanitized="", error="Input is required")


def test_none_input_is_required():
    r = validate_user_input(None)
    assert not r.is_valid
    assert r.error == InputError.MISSING.value


def test_script_tag_rejected():
    r = validate_user_input('<script>alert("xss")</script>')
    assert r.model_dump() == {"is_valid": False, "sanitized": "", "error": "Invalid input"}


@pytest.mark.parametrize("text", ["<b>", "hi <img src=x> there", "<>", "a << b > c"])
def test_any_tag_shape_rejected(text):
    assert validate_user_input(text).error == "Invalid input"


def test_unclosed_angle_bracket_is_not_markup():
    assert validate_user_input("1 < 2").is_valid


def test_sql_select_rejected():
    r = validate_user_input("SELECT * FROM users")
    assert r == ValidationResult(is_valid=False, sanitized="", error="Invalid input")


@pytest.mark.parametrize(
    "text",
    ["insert me", "UpDaTe", "please delete", "Drop it", "UNION all", "a -- comment", '"; DROP TABLE users; --'],
)
def test_sql_keywords_case_insensitive(text):
    assert validate_user_input(text).error == "Invalid input"


def test_sql_keyword_inside_word_is_false_positive():
    # "selection" contains "select"; the check is a plain substring match.
    assert not validate_user_input("natural selection").is_valid


@pytest.mark.parametrize("text", ["javascript:alert(1)", "see data:text/plain", "vbscript:msgbox"])
def test_dangerous_schemes_rejected(text):
    assert validate_user_input(text).error == "Invalid input"


@pytest.mark.parametrize("text", ["JavaScript:alert(1)", "DATA:stuff", "VBScript:x"])
def test_dangerous_schemes_are_case_sensitive(text):
    assert validate_user_input(text).is_valid


def test_whitespace_only_passes_and_trims_to_empty():
    # Whitespace is not empty; it passes and trims to "".
    r = validate_user_input("   ")
    assert r.is_valid
    assert r.sanitized == ""


# ---------------------------------------------------------------------------
# Acceptance
# ---------------------------------------------------------------------------

def test_clean_input_is_valid():
    r = validate_user_input("Hello world")
    assert r.is_valid
    assert r.sanitized == "Hello world"
    assert r.error is None
    assert r.model_dump(exclude_none=True) == {"is_valid": True, "sanitized": "Hello world"}


def test_sanitize_only_trims():
    r = validate_user_input("  Tom & Jerry's \"show\"\n")
    assert r.sanitized == "Tom & Jerry's \"show\""


@pytest.mark.parametrize("text", ["  padded  ", "\tValid input\n", "plain"])
def test_trim_is_idempotent(text):
    assert validate_user_input(text.strip()).sanitized == validate_user_input(text).sanitized


# ---------------------------------------------------------------------------
# Result invariants
# ---------------------------------------------------------------------------

def test_valid_result_cannot_carry_error():
    with pytest.raises(ValidationError):
        ValidationResult(is_valid=True, sanitized="x", error="Invalid input")


def test_invalid_result_needs_error_and_empty_sanitized():
    with pytest.raises(ValidationError):
        ValidationResult(is_valid=False, sanitized="")
    with pytest.raises(ValidationError):
        ValidationResult(is_valid=False, sanitized="x", error="Invalid input")


def test_result_is_frozen():
    r = validate_user_input("ok")
    with pytest.raises(ValidationError):
        r.sanitized = "changed"
