"""Typed request/response models shared across the calculation services.

Calculator inputs and results are frozen Pydantic models so that a result,
once produced, is never mutated; a new calculation replaces it wholesale. Wire
payloads accepted by the HTTP layer live in :mod:`.api` and are converted into
these models by the calculation service.
"""

from __future__ import annotations

from .api import (
    DEFAULT_PERIOD,
    BusinessCalculationRequest,
    PersonalCalculationRequest,
    format_validation_error,
)
from .business import (
    BusinessTaxResult,
    ExpenseRecord,
    MonthlyTaxBreakdown,
    SalesTransaction,
    parse_timestamp,
)
from .coercion import coerce_amount, coerce_number
from .personal import (
    MONTHS_PER_YEAR,
    BandResult,
    CalculationInput,
    CalculationResult,
    Deduction,
    DeductionLine,
    Mode,
    normalise_mode,
)

__all__ = [
    "BandResult",
    "BusinessCalculationRequest",
    "BusinessTaxResult",
    "CalculationInput",
    "CalculationResult",
    "DEFAULT_PERIOD",
    "Deduction",
    "DeductionLine",
    "ExpenseRecord",
    "MONTHS_PER_YEAR",
    "Mode",
    "MonthlyTaxBreakdown",
    "PersonalCalculationRequest",
    "SalesTransaction",
    "coerce_amount",
    "coerce_number",
    "format_validation_error",
    "normalise_mode",
    "parse_timestamp",
]
