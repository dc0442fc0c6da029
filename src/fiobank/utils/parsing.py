"""Parsing utilities for Fio API values."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

# Plain decimal literal as Fio sends amounts: optional sign, no exponent
AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_FORMAT = "%Y-%m-%d"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_date(date_str: str) -> date | None:
    """
    Parse a Fio date value.

    Fio appends a timezone offset to dates (2023-01-02+0100), so only the
    first 10 characters are parsed as YYYY-MM-DD.

    Args:
        date_str: Date string to parse

    Returns:
        date object if successful, None otherwise
    """
    prefix = date_str[:10]
    if len(prefix) < 10 or not DATE_PATTERN.fullmatch(prefix):
        return None

    try:
        return datetime.strptime(prefix, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_amount(amount_str: str) -> Decimal | None:
    """
    Parse a decimal literal to Decimal.

    Only plain literals such as "50.25" or "-1200" are accepted; thousands
    separators, exponents and special values like NaN are rejected.

    Args:
        amount_str: Amount string to parse

    Returns:
        Decimal if successful, None otherwise
    """
    if not AMOUNT_PATTERN.fullmatch(amount_str):
        return None

    try:
        return Decimal(amount_str)
    except InvalidOperation:
        return None


def format_number(value: int | Decimal) -> str:
    """Render a JSON number as canonical decimal text (no exponent)."""
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def is_int64(value: object) -> bool:
    """Return True if value is an integer that fits a signed 64-bit slot."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return INT64_MIN <= value <= INT64_MAX
