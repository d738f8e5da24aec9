"""Integration coverage for configuration metadata endpoints."""

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from nairatax.backend.version import get_project_version


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"version": get_project_version()}


def test_list_years_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/years")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    years = {entry["year"]: entry for entry in payload["years"]}
    assert set(years) == {2025, 2026}
    assert years[2025]["status"] == "legacy"
    assert payload["default_year"] == 2026


def test_personal_schedule_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2026/personal")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["threshold_relief"] == 800_000
    assert payload["cra"] == {"floor": 200_000, "gross_percentage": 0.01, "gross_rate": 0.2}
    assert payload["modes"] == ["monthly", "yearly"]
    assert "NHF (Housing Fund)" in payload["deduction_suggestions"]

    bands = payload["bands"]
    assert [band["rate_label"] for band in bands] == ["15%", "18%", "21%", "23%", "25%"]
    assert bands[1]["lower"] == 2_200_000
    assert bands[1]["upper"] == 9_200_000
    assert bands[-1]["lower"] == 49_200_000
    assert bands[-1]["upper"] is None


def test_business_settings_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2026/business")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["vat_rate"] == pytest.approx(7.5)
    assert payload["nhl_rate"] == pytest.approx(0.5)
    assert [band["label"] for band in payload["revenue_bands"]] == [
        "Small (Exempted)",
        "Medium",
        "Large",
    ]
    assert "last-quarter" in payload["periods"]


def test_unknown_year_returns_not_found(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/1999/personal")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"
