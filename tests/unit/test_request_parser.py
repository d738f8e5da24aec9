"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from nairatax.backend.services.request_parser import parse_calculation_payload


def test_parse_payload_uses_year_query_parameter(app: Flask) -> None:
    """The ``year`` query parameter should fill in a missing body year."""

    with app.test_request_context(
        "/api/v1/calculations/personal?year=2025",
        method="POST",
        json={"gross_income": 1_000_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload["year"] == 2025


def test_parse_payload_prefers_body_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations/personal?year=2025",
        method="POST",
        json={"year": 2026, "gross_income": 1_000_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload["year"] == 2026


def test_parse_payload_rejects_non_numeric_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations/personal?year=latest",
        method="POST",
        json={},
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/calculations/personal",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)
