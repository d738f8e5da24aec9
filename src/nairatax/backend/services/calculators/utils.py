"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from collections.abc import Sequence

from nairatax.backend.config.schema import TaxBand


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for the fraction ``value``."""

    percentage = round(value * 100, 6)
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def allocate_bands(
    amount: float, bands: Sequence[TaxBand]
) -> list[tuple[TaxBand, float, float]]:
    """Split ``amount`` across ``bands`` from the lowest band upwards.

    Returns ``(band, taxable, tax)`` for every band, including bands that
    received nothing, so callers always see the full schedule.
    """

    remaining = amount if amount > 0 else 0.0
    allocations: list[tuple[TaxBand, float, float]] = []

    for band in bands:
        if band.width is None:
            band_amount = remaining
        else:
            band_amount = min(remaining, band.width)
        band_tax = band_amount * band.rate
        remaining -= band_amount
        allocations.append((band, band_amount, band_tax))

    return allocations


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit with halves rounded towards +inf."""

    return math.floor(value + 0.5)


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)
