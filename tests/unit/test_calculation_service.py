"""Unit tests for the calculation service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from nairatax.backend.app.models import CalculationInput, PersonalCalculationRequest
from nairatax.backend.config.year_config import default_year
from nairatax.backend.services.calculation_service import (
    build_calculation_input,
    calculate_business_analysis,
    calculate_personal_tax,
)

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_personal_tax_defaults_to_latest_year() -> None:
    result = calculate_personal_tax({"mode": "yearly", "gross_income": 6_000_000})

    assert result["meta"]["year"] == default_year()
    assert result["meta"]["currency"] == "NGN"
    assert result["yearly_tax"] == pytest.approx(618_000)
    assert result["monthly_tax"] == pytest.approx(51_500)
    assert result["effective_rate"] == pytest.approx(10.3)
    assert len(result["band_breakdown"]) == 5
    assert result["band_breakdown"][-1]["width"] is None


def test_personal_tax_rounds_amounts_to_two_decimals() -> None:
    result = calculate_personal_tax({"gross_income": 7_777_777.777})

    for key in ("gross", "cra", "taxable_income", "yearly_tax", "monthly_tax"):
        value = result[key]
        assert value == round(value, 2)
    for band in result["band_breakdown"]:
        assert band["tax"] == round(band["tax"], 2)


def test_personal_tax_uses_requested_year_schedule() -> None:
    result = calculate_personal_tax({"year": 2025, "gross_income": 6_000_000})

    assert result["meta"]["year"] == 2025
    assert result["threshold_relief"] == 0
    assert result["taxable_income"] == pytest.approx(4_600_000)
    assert [band["tax"] for band in result["band_breakdown"]] == pytest.approx(
        [21_000, 33_000, 75_000, 95_000, 336_000, 336_000]
    )
    assert result["yearly_tax"] == pytest.approx(896_000)


def test_personal_tax_echoes_annualised_deductions() -> None:
    result = calculate_personal_tax(
        {
            "mode": "monthly",
            "gross_income": 500_000,
            "deductions": [{"name": "NHIS (Health Insurance)", "amount": "15000"}],
        }
    )

    assert result["deductions"] == [
        {"name": "NHIS (Health Insurance)", "amount": 15_000.0, "annual_amount": 180_000.0}
    ]
    assert result["other"] == pytest.approx(180_000)


def test_personal_tax_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="Invalid calculation payload"):
        calculate_personal_tax({"gross_income": 1, "salary": 2})


def test_personal_tax_rejects_malformed_deductions() -> None:
    with pytest.raises(ValueError, match="list"):
        calculate_personal_tax({"gross_income": 1, "deductions": "NHF"})

    with pytest.raises(ValueError, match="deduction"):
        calculate_personal_tax({"gross_income": 1, "deductions": [42]})


def test_personal_tax_rejects_unconfigured_year() -> None:
    with pytest.raises(FileNotFoundError):
        calculate_personal_tax({"year": 1999, "gross_income": 1})


def test_personal_tax_rejects_non_mapping_payload() -> None:
    with pytest.raises(ValueError, match="mapping"):
        calculate_personal_tax(["gross_income", 1])  # type: ignore[arg-type]


def test_build_calculation_input_coerces_request_values() -> None:
    request = PersonalCalculationRequest.model_validate(
        {
            "mode": "MONTHLY",
            "gross_income": "250000",
            "pension_contribution": None,
            "deductions": [{"name": " Others ", "amount": -5}],
        }
    )

    calculation_input = build_calculation_input(request)

    assert isinstance(calculation_input, CalculationInput)
    assert calculation_input.mode == "monthly"
    assert calculation_input.gross_income == 250_000
    assert calculation_input.pension_contribution == 0
    assert calculation_input.deductions[0].name == "Others"
    assert calculation_input.deductions[0].amount == 0


def test_business_analysis_returns_rounded_payload() -> None:
    result = calculate_business_analysis(
        {
            "period": "This-Month",
            "transactions": [
                {"total": "1000.555", "created_at": "2026-06-10T10:00:00Z", "staff": "Ada"},
            ],
            "expenses": [],
        },
        now=NOW,
    )

    assert result["period"] == "this-month"
    assert result["total_revenue"] == pytest.approx(1000.56, abs=0.006)
    assert result["meta"]["period"] == "this-month"
    assert result["meta"]["generated_at"] == NOW.isoformat()
    assert result["breakdown"][0]["month"] == "June 2026"


def test_business_analysis_defaults_to_last_month() -> None:
    result = calculate_business_analysis({}, now=NOW)

    assert result["period"] == "last-month"
    assert result["total_tax_liability"] == 0
    assert result["breakdown"] == []


def test_business_analysis_rejects_non_list_records() -> None:
    with pytest.raises(ValueError, match="Transactions must be provided as a list"):
        calculate_business_analysis({"transactions": {"total": 1}}, now=NOW)


def test_profiling_logs_timings(monkeypatch, caplog) -> None:
    monkeypatch.setenv("NAIRATAX_PROFILE_CALCULATIONS", "1")
    caplog.set_level(logging.DEBUG, logger="nairatax.backend.services.calculation_service")

    calculate_personal_tax({"gross_income": 6_000_000})

    assert any("calculate_personal_tax timings" in record.message for record in caplog.records)
