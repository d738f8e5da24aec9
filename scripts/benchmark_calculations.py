#!/usr/bin/env python3
"""Report baseline timings for the personal and business tax services."""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from time import perf_counter
from typing import Any, Callable

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from nairatax.backend.services.calculation_service import (  # noqa: E402
    calculate_business_analysis,
    calculate_personal_tax,
)

NOW = datetime(2026, 6, 30, 12, 0, tzinfo=timezone.utc)

PERSONAL_PAYLOAD = {
    "mode": "monthly",
    "gross_income": 1_250_000,
    "pension_contribution": 100_000,
    "deductions": [
        {"name": "NHF (Housing Fund)", "amount": 31_250},
        {"name": "NHIS (Health Insurance)", "amount": 15_000},
    ],
}


def _business_payload(records: int) -> dict[str, Any]:
    transactions = [
        {"total": 18_500 + index, "created_at": (NOW - timedelta(hours=index)).isoformat()}
        for index in range(records)
    ]
    expenses = [
        {"amount": 4_200, "created_at": (NOW - timedelta(hours=index * 3)).isoformat()}
        for index in range(records // 4)
    ]
    return {"period": "this-year", "transactions": transactions, "expenses": expenses}


def measure(call: Callable[[], Any], iterations: int) -> dict[str, float]:
    """Return timing statistics for ``iterations`` repeated calls."""

    call()  # Warm configuration caches
    start = perf_counter()
    for _ in range(iterations):
        call()
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("NAIRATAX_PROFILE_ITERATIONS", "200"))
    business_payload = _business_payload(int(os.getenv("NAIRATAX_PROFILE_RECORDS", "2000")))
    report = {
        "personal": measure(lambda: calculate_personal_tax(PERSONAL_PAYLOAD), iterations),
        "business": measure(
            lambda: calculate_business_analysis(business_payload, now=NOW),
            max(1, iterations // 20),
        ),
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
