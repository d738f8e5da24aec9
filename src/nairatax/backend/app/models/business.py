"""Records and results for the business tax analysis."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .coercion import coerce_number


def parse_timestamp(value: Any) -> datetime | None:
    """Parse ``value`` into an aware UTC datetime, or ``None`` when unusable.

    Naive timestamps are assumed to be UTC. Bare dates are read as midnight.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class SalesTransaction(BaseModel):
    """Completed sale as returned by the transactions endpoint.

    Order documents use ``createdAt``; both spellings are accepted.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    total: float = 0.0
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)


class ExpenseRecord(BaseModel):
    """Recorded business expense."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    amount: float = 0.0
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    expense_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("expense_date", "expenseDate")
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("created_at", "expense_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    @property
    def booked_at(self) -> datetime | None:
        return self.created_at or self.expense_date


class MonthlyTaxBreakdown(BaseModel):
    """Income, expenses and whole-unit tax figures for one calendar month."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: str
    income: float
    expenses: float
    vat: int
    cit: int
    nhl: int


class BusinessTaxResult(BaseModel):
    """Company tax position for a reporting period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: str
    window_start: datetime
    window_end: datetime
    total_revenue: float
    total_expenses: float
    net_profit: float
    band: str
    cit_rate: float
    taxable_income: float
    company_income_tax: float
    vat_on_sales: float
    vat_rate: float
    nhl_amount: float
    nhl_rate: float
    total_tax_liability: float
    breakdown: tuple[MonthlyTaxBreakdown, ...] = ()


__all__ = [
    "BusinessTaxResult",
    "ExpenseRecord",
    "MonthlyTaxBreakdown",
    "SalesTransaction",
    "parse_timestamp",
]
