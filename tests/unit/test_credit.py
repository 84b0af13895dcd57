"""Unit tests for credit amount calculation and input coercion"""

import pytest
from decimal import Decimal
from credit_approver.domain.credit import (
    CREDIT_MONTHS,
    compute_credit_amount,
    format_currency,
    parse_amount,
    parse_int,
)


def test_compute_credit_amount_examples():
    """Test (income - expenses) * 12"""
    assert compute_credit_amount(5000, 3000) == 24000
    assert compute_credit_amount(3000, 3000) == 0
    assert compute_credit_amount(8000, 4000) == 48000


def test_compute_credit_amount_shortfall_is_negative():
    """Test no clamping to zero when expenses exceed income"""
    assert compute_credit_amount(2000, 3000) == -12000


def test_compute_credit_amount_truncates_final_result():
    """Test fractions survive until the final truncation"""
    # 0.10 * 12 = 1.2 → 1
    assert compute_credit_amount(Decimal("1000.10"), Decimal("1000")) == 1
    assert compute_credit_amount(1000.5, 1000.25) == 3
    # Truncation is toward zero for shortfalls
    assert compute_credit_amount(Decimal("1000"), Decimal("1000.10")) == -1


def test_compute_credit_amount_uses_twelve_months():
    assert CREDIT_MONTHS == 12
    assert compute_credit_amount(200, 100) == 1200


@pytest.mark.parametrize(
    "value, expected",
    [
        ("3", 3),
        (" 4 ", 4),
        ("12abc", 12),
        ("-2", -2),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (7, 7),
        (2.9, 0),
        (True, 0),
    ],
)
def test_parse_int(value, expected):
    """Test step coercion: leading integer or 0"""
    assert parse_int(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("5000", Decimal("5000")),
        ("5000.75", Decimal("5000.75")),
        (" 42 ", Decimal("42")),
        (1500, Decimal("1500")),
        (0.1, Decimal("0.1")),
        ("", Decimal(0)),
        ("five thousand", Decimal(0)),
        ("NaN", Decimal(0)),
        ("Infinity", Decimal(0)),
        (None, Decimal(0)),
        ([], Decimal(0)),
        ("1e5000", Decimal(0)),
        ("1E3", Decimal(0)),
        ("1e999999999", Decimal(0)),
        ("9" * 5000, Decimal(0)),
        (1e300, Decimal(0)),
        (".5", Decimal("0.5")),
        ("-250", Decimal("-250")),
    ],
)
def test_parse_amount(value, expected):
    """Test money coercion: numeric text or 0"""
    assert parse_amount(value) == expected


def test_format_currency():
    assert format_currency(0) == "0"
    assert format_currency(999) == "999"
    assert format_currency(1000) == "1,000"
    assert format_currency(24000) == "24,000"
    assert format_currency(1000000) == "1,000,000"
    assert format_currency(-12000) == "-12,000"


def test_oversized_amount_yields_printable_credit():
    """Test exponent input cannot blow up the computed amount"""
    amount = compute_credit_amount(parse_amount("1e5000"), parse_amount("0"))

    assert amount == 0
    assert format_currency(amount) == "0"


def test_largest_accepted_amount_formats():
    income = parse_amount("9" * 15)
    amount = compute_credit_amount(income, Decimal(0))

    assert amount == int("9" * 15) * 12
    assert format_currency(amount).startswith("11,999,999")
