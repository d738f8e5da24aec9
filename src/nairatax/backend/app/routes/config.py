"""Expose configuration metadata consumed by the web client.

Forms for the personal tax calculator populate their deduction suggestions and
band table from these endpoints instead of hard-coding statutory values.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from nairatax.backend.app.http import problem_response
from nairatax.backend.config.year_config import (
    BusinessTaxConfig,
    PersonalTaxConfig,
    YearConfiguration,
    available_years,
    load_manifest,
    load_year_configuration,
    manifest_entries,
)
from nairatax.backend.services.calculators import PERIODS, format_percentage
from nairatax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_personal(config: PersonalTaxConfig) -> dict[str, Any]:
    lower_bound = 0.0
    bands: list[dict[str, Any]] = []
    for band in config.bands:
        upper_bound = None if band.width is None else lower_bound + band.width
        bands.append(
            {
                "label": band.label,
                "width": band.width,
                "rate": band.rate,
                "rate_label": format_percentage(band.rate),
                "lower": lower_bound,
                "upper": upper_bound,
            }
        )
        if upper_bound is not None:
            lower_bound = upper_bound

    return {
        "threshold_relief": config.threshold_relief,
        "cra": {
            "floor": config.cra_floor,
            "gross_percentage": config.cra_gross_percentage,
            "gross_rate": config.cra_gross_rate,
        },
        "bands": bands,
        "deduction_suggestions": list(config.deduction_suggestions),
        "modes": ["monthly", "yearly"],
    }


def _serialise_business(config: BusinessTaxConfig) -> dict[str, Any]:
    return {
        "revenue_bands": [
            {"label": band.label, "upper": band.upper_bound, "rate": band.rate}
            for band in config.revenue_bands
        ],
        "vat_rate": config.vat_rate,
        "nhl_rate": config.nhl_rate,
        "standard_deduction_rate": config.standard_deduction_rate,
        "periods": list(PERIODS),
    }


def _load_or_problem(year: int) -> YearConfiguration | tuple[Any, int]:
    try:
        return load_year_configuration(year)
    except FileNotFoundError as exc:
        return problem_response("not_found", status=404, message=str(exc)).to_response()


@blueprint.get("/meta")
def get_meta() -> Any:
    """Return the running application version."""

    return jsonify({"version": get_project_version()})


@blueprint.get("/years")
def list_years() -> Any:
    """List configured tax years with their status."""

    years = [
        {
            "year": entry.year,
            "status": entry.status,
            "notes_url": entry.notes_url,
        }
        for entry in sorted(manifest_entries(), key=lambda item: item.year)
    ]
    supported = list(available_years())
    return jsonify(
        {
            "years": years,
            "default_year": supported[-1] if supported else None,
        }
    )


@blueprint.get("/<int:year>/personal")
def get_personal_schedule(year: int) -> Any:
    """Return the personal tax schedule configured for ``year``."""

    loaded = _load_or_problem(year)
    if not isinstance(loaded, YearConfiguration):
        return loaded

    payload = {"year": loaded.year, "currency": loaded.currency}
    payload.update(_serialise_personal(loaded.personal))
    return jsonify(payload)


@blueprint.get("/<int:year>/business")
def get_business_settings(year: int) -> Any:
    """Return the business tax settings configured for ``year``."""

    loaded = _load_or_problem(year)
    if not isinstance(loaded, YearConfiguration):
        return loaded

    payload = {"year": loaded.year, "currency": loaded.currency}
    payload.update(_serialise_business(loaded.business))
    return jsonify(payload)
