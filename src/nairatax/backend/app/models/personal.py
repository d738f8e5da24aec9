"""Value objects for the personal income tax calculator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from nairatax.backend.config.schema import TaxBand

from .coercion import coerce_amount

Mode = Literal["monthly", "yearly"]

MONTHS_PER_YEAR = 12


def normalise_mode(value: Any) -> Mode:
    """Return ``"monthly"`` for monthly hints and ``"yearly"`` for anything else."""

    if isinstance(value, str) and value.strip().lower() == "monthly":
        return "monthly"
    return "yearly"


class Deduction(BaseModel):
    """A named itemised deduction entered per the selected periodicity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ""
    amount: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return coerce_amount(value)


class CalculationInput(BaseModel):
    """Normalised input for a single personal tax calculation.

    Validation never fails: anything that is not a finite, positive number is
    read as zero, a deductions value that is not a list means no deductions,
    and a deduction entry that is not an object counts as a zero amount.
    Unknown keys are ignored and the web client's camelCase names are
    accepted. Strict payload checks belong to the API request models.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    mode: Mode = "yearly"
    gross_income: float = Field(
        default=0.0, validation_alias=AliasChoices("gross_income", "grossIncome")
    )
    pension_contribution: float = Field(
        default=0.0,
        validation_alias=AliasChoices("pension_contribution", "pensionContribution"),
    )
    deductions: tuple[Deduction, ...] = ()

    @field_validator("mode", mode="before")
    @classmethod
    def _normalise_mode(cls, value: Any) -> Mode:
        return normalise_mode(value)

    @field_validator("gross_income", "pension_contribution", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("deductions", mode="before")
    @classmethod
    def _coerce_deductions(cls, value: Any) -> tuple[Any, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            return ()
        entries: list[Deduction] = []
        for entry in value:
            if isinstance(entry, Deduction):
                entries.append(entry)
            elif isinstance(entry, Mapping):
                entries.append(
                    Deduction(name=entry.get("name"), amount=entry.get("amount"))
                )
            else:
                entries.append(Deduction())
        return tuple(entries)

    @property
    def multiplier(self) -> int:
        return MONTHS_PER_YEAR if self.mode == "monthly" else 1

    @property
    def deductions_total(self) -> float:
        return sum(entry.amount for entry in self.deductions)


class BandResult(TaxBand):
    """A tax band together with the income it absorbed and the tax charged."""

    taxable: float = 0.0
    tax: float = 0.0


class DeductionLine(BaseModel):
    """Deduction echoed back with its annualised amount."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    amount: float
    annual_amount: float


class CalculationResult(BaseModel):
    """Raw outcome of a personal tax calculation.

    All figures are annual except ``monthly_tax``. Values are unrounded; use
    :meth:`rounded` at the presentation boundary.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Mode
    gross: float
    threshold_relief: float
    after_threshold: float
    pension: float
    other: float
    cra: float
    taxable_income: float
    yearly_tax: float
    monthly_tax: float
    effective_rate: float
    band_breakdown: tuple[BandResult, ...]
    deductions: tuple[DeductionLine, ...] = ()

    def rounded(self, digits: int = 2) -> CalculationResult:
        """Return a copy with every amount and the effective rate rounded."""

        def _round(value: float) -> float:
            return round(value, digits)

        return self.model_copy(
            update={
                "gross": _round(self.gross),
                "threshold_relief": _round(self.threshold_relief),
                "after_threshold": _round(self.after_threshold),
                "pension": _round(self.pension),
                "other": _round(self.other),
                "cra": _round(self.cra),
                "taxable_income": _round(self.taxable_income),
                "yearly_tax": _round(self.yearly_tax),
                "monthly_tax": _round(self.monthly_tax),
                "effective_rate": _round(self.effective_rate),
                "band_breakdown": tuple(
                    band.model_copy(
                        update={"taxable": _round(band.taxable), "tax": _round(band.tax)}
                    )
                    for band in self.band_breakdown
                ),
                "deductions": tuple(
                    line.model_copy(
                        update={
                            "amount": _round(line.amount),
                            "annual_amount": _round(line.annual_amount),
                        }
                    )
                    for line in self.deductions
                ),
            }
        )


__all__ = [
    "BandResult",
    "CalculationInput",
    "CalculationResult",
    "Deduction",
    "DeductionLine",
    "MONTHS_PER_YEAR",
    "Mode",
    "normalise_mode",
]
