"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from nairatax.backend.services import (
    build_calculation_response,
    calculate_business_analysis,
    calculate_personal_tax,
    parse_calculation_payload,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1/calculations")


@blueprint.post("/personal")
def create_personal_calculation() -> tuple[Any, int]:
    """Compute personal income tax from the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate_personal_tax(payload)

    return build_calculation_response(result)


@blueprint.post("/business")
def create_business_calculation() -> tuple[Any, int]:
    """Analyse company tax for the submitted sales and expense records."""

    payload = parse_calculation_payload(request)
    result = calculate_business_analysis(payload)

    return build_calculation_response(result)
