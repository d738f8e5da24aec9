"""Domain-specific calculation helpers."""

from .business import PERIODS, calculate_business_tax, resolve_period_window
from .personal import STATUTORY_SCHEDULE, calculate
from .utils import allocate_bands, format_percentage, round_currency, round_half_up

__all__ = [
    "PERIODS",
    "STATUTORY_SCHEDULE",
    "allocate_bands",
    "calculate",
    "calculate_business_tax",
    "format_percentage",
    "resolve_period_window",
    "round_currency",
    "round_half_up",
]
