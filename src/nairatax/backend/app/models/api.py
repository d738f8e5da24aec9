"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .business import ExpenseRecord, SalesTransaction

__all__ = [
    "BusinessCalculationRequest",
    "DEFAULT_PERIOD",
    "PersonalCalculationRequest",
    "format_validation_error",
]

DEFAULT_PERIOD = "last-month"


def _require_list(value: Any, section: str) -> Any:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{section} must be provided as a list")
    return value


class PersonalCalculationRequest(BaseModel):
    """Payload accepted by the personal income tax endpoint.

    Amount fields are deliberately untyped here; coercion happens when the
    payload is turned into a :class:`CalculationInput`.
    """

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=1900)
    mode: Any = "yearly"
    gross_income: Any = 0
    pension_contribution: Any = 0
    deductions: list[Any] = Field(default_factory=list)

    @field_validator("deductions", mode="before")
    @classmethod
    def _normalise_deductions(cls, value: Any) -> Any:
        entries = _require_list(value, "Deductions")
        if any(not isinstance(entry, Mapping) for entry in entries):
            raise ValueError("Each deduction must be an object with a name and amount")
        return entries


class BusinessCalculationRequest(BaseModel):
    """Payload accepted by the business tax analysis endpoint."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=1900)
    period: str = DEFAULT_PERIOD
    transactions: list[SalesTransaction] = Field(default_factory=list)
    expenses: list[ExpenseRecord] = Field(default_factory=list)

    @field_validator("period", mode="before")
    @classmethod
    def _normalise_period(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_PERIOD
        text = str(value).strip().lower()
        return text or DEFAULT_PERIOD

    @field_validator("transactions", mode="before")
    @classmethod
    def _normalise_transactions(cls, value: Any) -> Any:
        return _require_list(value, "Transactions")

    @field_validator("expenses", mode="before")
    @classmethod
    def _normalise_expenses(cls, value: Any) -> Any:
        return _require_list(value, "Expenses")


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
