"""Credit line calculation and numeric input coercion"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

CREDIT_MONTHS = 12

# Amounts at or above 10**15 are treated as unparsable
MAX_AMOUNT_DIGITS = 15

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_PLAIN_AMOUNT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_AMOUNT_LIMIT = Decimal(10) ** MAX_AMOUNT_DIGITS


def compute_credit_amount(
    monthly_income: int | float | Decimal,
    monthly_expenses: int | float | Decimal,
) -> int:
    """
    Annualise monthly disposable income into an offered credit line.

    (income - expenses) * 12, truncated toward zero once at the end.
    No clamping: a shortfall yields a negative amount, which callers treat
    as "not approved".

    Example:
        5000, 3000 → 24000
        2000, 3000 → -12000
    """
    disposable = _to_decimal(monthly_income) - _to_decimal(monthly_expenses)
    return int(disposable * CREDIT_MONTHS)


def parse_int(value: Any) -> int:
    """Parse the leading integer of a UI value; unparsable input becomes 0"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def parse_amount(value: Any) -> Decimal:
    """
    Parse a user-entered money figure.

    Text must be a plain decimal such as "5000" or "5000.75"; exponents,
    NaN and Infinity are rejected. Non-finite values and anything with more
    than MAX_AMOUNT_DIGITS integer digits become 0 as well.
    """
    if isinstance(value, bool) or value is None:
        return Decimal(0)
    if isinstance(value, str) and not _PLAIN_AMOUNT.fullmatch(value.strip()):
        return Decimal(0)
    try:
        amount = _to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)
    if not amount.is_finite() or abs(amount) >= _AMOUNT_LIMIT:
        return Decimal(0)
    return amount


def format_currency(amount: int) -> str:
    """Group thousands with commas: 1000000 → "1,000,000" """
    return f"{amount:,}"


def _to_decimal(value: int | float | Decimal | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() avoids binary float artefacts such as 0.1 → 0.1000000000000000055
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    return Decimal(value)
