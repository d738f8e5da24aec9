"""Integration tests covering CORS behaviour for API endpoints."""

import pytest
from flask.testing import FlaskClient

from nairatax.backend.app import create_app

WEB_CLIENT_ORIGIN = "https://app.nairatax.test"
ADMIN_ORIGIN = "https://admin.nairatax.test"
FOREIGN_ORIGIN = "https://elsewhere.test"


@pytest.fixture()
def cors_client(monkeypatch: pytest.MonkeyPatch) -> FlaskClient:
    """Return a client whose allow-list contains the two known origins."""

    monkeypatch.setenv(
        "NAIRATAX_ALLOWED_ORIGINS",
        f" {WEB_CLIENT_ORIGIN} ,{ADMIN_ORIGIN},,",
    )

    app = create_app()
    app.config.update(TESTING=True)

    with app.test_client() as client:
        yield client


def test_allowed_origin_can_read_schedule(cors_client: FlaskClient) -> None:
    response = cors_client.get(
        "/api/v1/config/2026/personal",
        headers={"Origin": WEB_CLIENT_ORIGIN},
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == WEB_CLIENT_ORIGIN


def test_calculation_preflight_allows_json_posts(cors_client: FlaskClient) -> None:
    response = cors_client.options(
        "/api/v1/calculations/personal",
        headers={
            "Origin": ADMIN_ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == ADMIN_ORIGIN
    assert "POST" in response.headers.get("Access-Control-Allow-Methods", "")
    assert "content-type" in response.headers.get("Access-Control-Allow-Headers", "").lower()


def test_foreign_origin_is_not_granted_access(cors_client: FlaskClient) -> None:
    response = cors_client.post(
        "/api/v1/calculations/personal",
        json={"gross_income": 6_000_000},
        headers={"Origin": FOREIGN_ORIGIN},
    )

    # The calculation still runs; the browser enforces the missing header.
    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") is None


def test_health_endpoint_is_outside_cors_scope(cors_client: FlaskClient) -> None:
    response = cors_client.get("/health", headers={"Origin": WEB_CLIENT_ORIGIN})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") is None


def test_missing_allow_list_emits_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NAIRATAX_ALLOWED_ORIGINS", raising=False)

    with pytest.warns(UserWarning, match="No allowed origins"):
        create_app()
