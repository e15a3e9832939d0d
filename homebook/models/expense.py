"""
Expense Ledger Models

An Expense is built straight from raw form input, so construction is
lenient: bad dates or amounts never raise, they leave the field empty
(or the amount at 0.0) and is_valid() reports the problem.

DESIGN DECISION: Expenses are immutable once stored. There is no
update operation - the user deletes and registers again.
"""

import math
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from homebook.utils.formatting import parse_currency, parse_positive_int


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseType(str, Enum):
    """
    Expense category codes, as submitted by the type select box.

    Stored records keep the raw code; unknown codes display as "Other".
    """
    FOOD = "1"
    EDUCATION = "2"
    LEISURE = "3"
    HEALTH = "4"
    TRANSPORT = "5"

    @property
    def label(self) -> str:
        return self.name.capitalize()


OTHER_TYPE_LABEL = "Other"


def expense_type_label(code: Optional[str]) -> str:
    """Display label for a category code."""
    try:
        return ExpenseType(code).label
    except ValueError:
        return OTHER_TYPE_LABEL


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

FORM_FIELDS = ("year", "month", "day", "type", "description", "value")


class Expense(BaseModel):
    """
    A single ledger entry.

    value is a float amount of currency units, parsed from the
    masked input ("R$ 10,00" -> 10.0).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default="",
        validate_default=True,
        description="Unique expense ID (generated when absent)"
    )
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    type: Optional[str] = Field(
        default=None,
        description="Category code, see ExpenseType"
    )
    description: Optional[str] = None
    value: float = Field(
        default=0.0,
        description="Amount in currency units"
    )

    @field_validator('id', mode='before')
    @classmethod
    def default_id(cls, v: Any) -> str:
        return str(v) if v else str(uuid4())

    @field_validator('year', 'month', 'day', mode='before')
    @classmethod
    def parse_date_part(cls, v: Any) -> Optional[int]:
        """Unparseable date parts are left empty instead of raising."""
        result = parse_positive_int(v)
        return result.value if result.ok else None

    @field_validator('type', 'description', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator('value', mode='before')
    @classmethod
    def parse_value(cls, v: Any) -> float:
        return parse_currency(v)

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "Expense":
        """Build an expense from the raw string values of the form."""
        return cls(**{name: data.get(name) for name in FORM_FIELDS})

    def is_valid(self) -> bool:
        """Every field present and a positive, real amount."""
        if not all((self.year, self.month, self.day, self.type, self.description)):
            return False
        if math.isnan(self.value) or self.value <= 0:
            return False
        return True

    @property
    def type_label(self) -> str:
        return expense_type_label(self.type)


# =============================================================================
# SEARCH FILTER
# =============================================================================

class ExpenseFilter(BaseModel):
    """
    Partial-match filter built from the non-empty form fields.

    Values are kept as the raw strings the user typed; matching
    parses them. A field that is None matches everything.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    year: Optional[str] = None
    month: Optional[str] = None
    day: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    value: Optional[str] = None

    @field_validator('*', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "ExpenseFilter":
        return cls(**{name: data.get(name) for name in FORM_FIELDS})

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in FORM_FIELDS)

    def matches(self, expense: Expense) -> bool:
        """True when every non-empty field matches the expense."""
        for name in ("year", "month", "day"):
            raw = getattr(self, name)
            if raw is None:
                continue
            parsed = parse_positive_int(raw)
            if not parsed.ok or parsed.value != getattr(expense, name):
                return False

        if self.type is not None and self.type != expense.type:
            return False

        if self.description is not None:
            haystack = (expense.description or "").lower()
            if self.description.lower() not in haystack:
                return False

        if self.value is not None:
            if round(parse_currency(self.value), 2) != round(expense.value, 2):
                return False

        return True
