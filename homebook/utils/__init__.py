"""Formatting and parsing helpers."""

from homebook.utils.formatting import (
    ParseResult,
    format_currency,
    format_currency_input,
    format_date,
    parse_amount,
    parse_currency,
    parse_positive_int,
)

__all__ = [
    "ParseResult",
    "format_currency",
    "format_currency_input",
    "format_date",
    "parse_amount",
    "parse_currency",
    "parse_positive_int",
]
