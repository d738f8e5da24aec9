"""Progressive personal income tax computation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nairatax.backend.app.models import (
    MONTHS_PER_YEAR,
    BandResult,
    CalculationInput,
    CalculationResult,
    DeductionLine,
)
from nairatax.backend.config.schema import PersonalTaxConfig

from .utils import allocate_bands

STATUTORY_SCHEDULE = PersonalTaxConfig()


def calculate(
    data: CalculationInput | Mapping[str, Any],
    schedule: PersonalTaxConfig | None = None,
) -> CalculationResult:
    """Compute annual and monthly personal income tax.

    Steps run in a fixed order: annualise the inputs, subtract the threshold
    relief, derive the consolidated relief allowance from the original gross,
    deduct pension, itemised deductions and CRA, then walk the bands.

    Itemised deductions are multiplied by twelve in monthly mode only, exactly
    like gross income and pension. In yearly mode they are taken as entered.

    Input is coerced rather than rejected, so this never raises for payload
    content. Figures are returned unrounded (``monthly_tax`` is exactly
    ``yearly_tax / 12``); call :meth:`CalculationResult.rounded` for the
    two-decimal values shown to users.
    """

    if isinstance(data, CalculationInput):
        payload = data
    elif isinstance(data, Mapping):
        payload = CalculationInput.model_validate(data)
    else:
        payload = CalculationInput()
    config = schedule or STATUTORY_SCHEDULE

    multiplier = payload.multiplier
    gross = payload.gross_income * multiplier
    pension = payload.pension_contribution * multiplier
    other = payload.deductions_total * multiplier

    after_threshold = max(0.0, gross - config.threshold_relief)

    cra = (
        max(config.cra_floor, gross * config.cra_gross_percentage)
        + gross * config.cra_gross_rate
    )

    taxable_income = max(0.0, after_threshold - pension - other - cra)

    total_tax = 0.0
    breakdown: list[BandResult] = []
    for band, taxable, tax in allocate_bands(taxable_income, config.bands):
        total_tax += tax
        breakdown.append(
            BandResult(
                width=band.width,
                rate=band.rate,
                label=band.label,
                taxable=taxable,
                tax=tax,
            )
        )

    effective_rate = (total_tax / gross) * 100 if gross > 0 else 0.0

    return CalculationResult(
        mode=payload.mode,
        gross=gross,
        threshold_relief=config.threshold_relief,
        after_threshold=after_threshold,
        pension=pension,
        other=other,
        cra=cra,
        taxable_income=taxable_income,
        yearly_tax=total_tax,
        monthly_tax=total_tax / MONTHS_PER_YEAR,
        effective_rate=effective_rate,
        band_breakdown=tuple(breakdown),
        deductions=tuple(
            DeductionLine(
                name=entry.name,
                amount=entry.amount,
                annual_amount=entry.amount * multiplier,
            )
            for entry in payload.deductions
        ),
    )


__all__ = ["STATUTORY_SCHEDULE", "calculate"]
