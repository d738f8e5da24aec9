"""Lenient numeric coercion for user-entered amounts."""

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from typing import Any


def coerce_number(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it is not numeric.

    Mirrors how form inputs are read by the web client: blanks, ``None``,
    unparsable text, ``NaN`` and infinities all collapse to zero instead of
    raising.

    Text is parsed with :func:`float`. Digit separators (``"1_000"``) are
    refused even though :func:`float` accepts them, matching ``Number()``.
    Prefixed literals (``"0x10"``, ``"0b11"``) are read as zero, whereas
    ``Number()`` would give sixteen and three.
    """

    if isinstance(value, bool):
        number = float(value)
    elif isinstance(value, (Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


def coerce_amount(value: Any) -> float:
    """Coerce ``value`` like :func:`coerce_number` and floor it at zero."""

    number = coerce_number(value)
    return number if number > 0 else 0.0


__all__ = ["coerce_amount", "coerce_number"]
