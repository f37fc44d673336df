# tests/test_validator.py
"""
Tests for index validation.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from fibcalc.runtime import APPLY, MAX_N
from fibcalc.utility import UserInputError
from fibcalc.validator import ValidationError, ValidationErrorKind, validate

NAN = ValidationErrorKind.NOT_A_NUMBER
NEG = ValidationErrorKind.NEGATIVE
BIG = ValidationErrorKind.TOO_LARGE

REJECTED = [
    ("", NAN),
    ("   ", NAN),
    ("abc", NAN),
    ("12abc", NAN),
    ("3.5", NAN),
    ("0x10", NAN),
    ("1__0", NAN),
    ("--1", NAN),
    ("-1", NEG),
    ("-45", NEG),
    ("-100", NEG),           # negative is reported before too-large
    ("46", BIG),
    ("100", BIG),
    ("+46", BIG),
    ("9" * 5000, BIG),       # longer than int()'s default digit guard
    ("-" + "9" * 5000, NEG),
]


@pytest.mark.parametrize("raw,kind", REJECTED, ids=[f"{k.name}:{r[:12]!r}" for r, k in REJECTED])
def test_rejected_inputs(raw, kind):
    with pytest.raises(ValidationError) as ei:
        validate(raw)
    assert ei.value.kind is kind


def test_reference_rejections_are_distinct():
    kinds = set()
    for raw in ("-1", "abc", "46"):
        with pytest.raises(ValidationError) as ei:
            validate(raw)
        kinds.add(ei.value.kind)
    assert kinds == {NEG, NAN, BIG}

    with pytest.raises(ValidationError) as ei:
        validate("")
    assert ei.value.kind is NAN


@pytest.mark.parametrize("n", range(MAX_N + 1))
def test_whole_range_accepted(n):
    assert validate(str(n)) == n


@pytest.mark.parametrize("raw,expected", [
    (" 7 ", 7),
    ("+7", 7),
    ("007", 7),
    ("-0", 0),
    ("4_5", 45),
])
def test_lenient_spellings(raw, expected):
    assert validate(raw) == expected


def test_none_is_not_a_number():
    with pytest.raises(ValidationError) as ei:
        validate(None)
    assert ei.value.kind is NAN


def test_explicit_bound():
    assert validate("100", max_n=100) == 100
    with pytest.raises(ValidationError) as ei:
        validate("11", max_n=10)
    assert ei.value.kind is BIG
    assert ei.value.max_n == 10


def test_zero_bound():
    assert validate("0", max_n=0) == 0
    with pytest.raises(ValidationError):
        validate("1", max_n=0)


def test_bound_comes_from_profile():
    APPLY({"LIMITS": {"MAX_N": 90}})
    assert validate("90") == 90
    with pytest.raises(ValidationError):
        validate("91")


def test_is_a_user_input_error():
    with pytest.raises(UserInputError):
        validate("x")
