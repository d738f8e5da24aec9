"""Orchestrate request validation, configuration lookup and tax calculations.

The service turns loosely-typed JSON payloads into the frozen calculator
models, picks the tax year configuration, runs the pure calculators and shapes
their raw results for clients. Amounts are rounded to two decimals here and
nowhere else, so the calculators keep exact band arithmetic.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from time import perf_counter
from typing import Any

from pydantic import BaseModel, ValidationError

from nairatax.backend.app.models import (
    BusinessCalculationRequest,
    CalculationInput,
    PersonalCalculationRequest,
    format_validation_error,
)
from nairatax.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import calculate, calculate_business_tax, round_currency

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("NAIRATAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _log_timings(label: str, timings: dict[str, float] | None, start: float | None) -> None:
    if timings is None or start is None:
        return
    timings["total"] = perf_counter() - start
    _LOGGER.debug(
        "%s timings (ms): %s",
        label,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


def _validate_request(model: type[BaseModel], payload: Mapping[str, Any] | BaseModel) -> Any:
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _resolve_configuration(year: int | None) -> YearConfiguration:
    """Return configuration for ``year``, defaulting to the latest configured year."""

    return load_year_configuration(year if year is not None else default_year())


def _round_amounts(payload: Any) -> Any:
    if isinstance(payload, float):
        return round_currency(payload)
    if isinstance(payload, dict):
        return {key: _round_amounts(value) for key, value in payload.items()}
    if isinstance(payload, list):
        return [_round_amounts(item) for item in payload]
    return payload


def build_calculation_input(request: PersonalCalculationRequest) -> CalculationInput:
    """Convert a validated personal tax request into calculator input."""

    return CalculationInput.model_validate(
        {
            "mode": request.mode,
            "gross_income": request.gross_income,
            "pension_contribution": request.pension_contribution,
            "deductions": request.deductions,
        }
    )


def calculate_personal_tax(
    payload: Mapping[str, Any] | PersonalCalculationRequest,
) -> dict[str, Any]:
    """Compute personal income tax for the provided payload."""

    request_model: PersonalCalculationRequest = _validate_request(
        PersonalCalculationRequest, payload
    )

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    config = _resolve_configuration(request_model.year)

    with _profile_section("normalise_payload", timings):
        calculation_input = build_calculation_input(request_model)

    with _profile_section("personal", timings):
        result = calculate(calculation_input, config.personal)

    _log_timings("calculate_personal_tax", timings, overall_start)

    response = result.rounded().model_dump(mode="json")
    response["meta"] = {"year": config.year, "currency": config.currency}
    return response


def calculate_business_analysis(
    payload: Mapping[str, Any] | BusinessCalculationRequest,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Compute the business tax analysis for the provided payload."""

    request_model: BusinessCalculationRequest = _validate_request(
        BusinessCalculationRequest, payload
    )

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    config = _resolve_configuration(request_model.year)
    moment = now or datetime.now(timezone.utc)

    with _profile_section("business", timings):
        result = calculate_business_tax(
            request_model.transactions,
            request_model.expenses,
            request_model.period,
            moment,
            config.business,
        )

    _log_timings("calculate_business_analysis", timings, overall_start)
    _LOGGER.info(
        "Business tax analysis for %s covered %d transaction(s) and %d expense(s)",
        request_model.period,
        len(request_model.transactions),
        len(request_model.expenses),
    )

    response = _round_amounts(result.model_dump(mode="json"))
    response["meta"] = {
        "year": config.year,
        "currency": config.currency,
        "period": request_model.period,
        "generated_at": moment.isoformat(),
    }
    return response


__all__ = [
    "build_calculation_input",
    "calculate_business_analysis",
    "calculate_personal_tax",
]
