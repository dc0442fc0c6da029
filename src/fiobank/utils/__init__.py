"""Utility functions for fiobank."""

from fiobank.utils.parsing import (
    format_number,
    is_int64,
    parse_amount,
    parse_date,
)

__all__ = ["parse_date", "parse_amount", "format_number", "is_int64"]
