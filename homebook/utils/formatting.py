"""
Formatting and Parsing Helpers

Pure functions shared by both apps: currency and date display (pt-BR,
BRL) and the parsers that turn raw form strings into numbers.

DESIGN DECISION: Currency input is handled in integer minor units.
Every non-digit is dropped, the digits are read as cents and divided
by 100. That makes "R$ 10,00", "10,00" and "1000" all mean 10.0, and
guarantees parse_currency(format_currency_input(digits)) round-trips.

Parsers come in two flavours:
- parse_amount / parse_positive_int return a tagged ParseResult
- parse_currency is the lenient form used by entity construction
  (a failed parse becomes 0.0, which then fails entity validation)
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

CURRENCY_SYMBOL = "R$"

_NON_DIGITS = re.compile(r"\D")


class ParseResult(BaseModel):
    """Outcome of parsing one raw input value."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: Optional[Union[int, float]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Union[int, float]) -> "ParseResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)


def _swap_separators(text: str) -> str:
    """'1,234.56' -> '1.234,56'"""
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _minor_units(raw: str) -> int:
    digits = _NON_DIGITS.sub("", raw)
    return int(digits) if digits else 0


def format_currency(value: Union[int, float, Decimal]) -> str:
    """Format an amount for display, e.g. 1234.5 -> 'R$ 1.234,50'."""
    amount = Decimal(str(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {_swap_separators(f'{abs(amount):,.2f}')}"


def format_date(day: Any, month: Any, year: Any) -> str:
    """Format date parts as DD/MM/YYYY without calendar validation."""
    return f"{str(day).rjust(2, '0')}/{str(month).rjust(2, '0')}/{year}"


def format_currency_input(raw: str) -> str:
    """
    Mask a value typed into a currency field.

    '1' -> 'R$ 0,01', '1000' -> 'R$ 10,00', 'R$ 10,005' -> 'R$ 100,05'
    """
    amount = Decimal(_minor_units(raw or "")).scaleb(-2)
    return f"{CURRENCY_SYMBOL} {_swap_separators(f'{amount:,.2f}')}"


def parse_amount(raw: Any) -> ParseResult:
    """
    Parse a currency amount.

    Numbers pass through unchanged. Strings are read as minor units.
    """
    if raw is None or isinstance(raw, bool):
        return ParseResult.failure("amount is missing")

    if isinstance(raw, (int, float, Decimal)):
        amount = float(raw)
        if math.isnan(amount):
            return ParseResult.failure("amount is not a number")
        return ParseResult.success(amount)

    digits = _NON_DIGITS.sub("", str(raw))
    if not digits:
        return ParseResult.failure(f"no digits in {raw!r}")
    return ParseResult.success(int(digits) / 100)


def parse_currency(raw: Any) -> float:
    """Lenient amount parser: anything unparseable becomes 0.0."""
    result = parse_amount(raw)
    return float(result.value) if result.ok else 0.0


def parse_positive_int(raw: Any) -> ParseResult:
    """Parse a strictly positive integer such as a year, month or day."""
    if raw is None or isinstance(raw, bool):
        return ParseResult.failure("value is missing")

    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return ParseResult.failure(f"{raw!r} is not a whole number")
        number = int(raw)
    else:
        text = str(raw).strip()
        if not text:
            return ParseResult.failure("value is missing")
        if not text.isdecimal():
            return ParseResult.failure(f"{raw!r} is not a whole number")
        number = int(text)

    if number <= 0:
        return ParseResult.failure(f"{number} is not positive")
    return ParseResult.success(number)
