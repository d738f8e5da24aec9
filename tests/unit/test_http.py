"""Unit tests for problem response helpers."""

from __future__ import annotations

from werkzeug.exceptions import BadRequest

from nairatax.backend.app.http import problem_from_exception, problem_response
from nairatax.backend.config.schema import ConfigurationError


def test_problem_response_merges_extra_fields() -> None:
    problem = problem_response("not_found", status=404, message="Missing", year=1999)

    assert problem.as_dict() == {"error": "not_found", "message": "Missing", "year": 1999}


def test_problem_from_exception_maps_known_errors() -> None:
    assert problem_from_exception(BadRequest("Broken JSON")).status == 400
    assert problem_from_exception(BadRequest("Broken JSON")).error == "bad_request"
    assert problem_from_exception(FileNotFoundError("no year")).status == 404
    assert problem_from_exception(ConfigurationError("bad")).error == "validation_error"
    assert problem_from_exception(RuntimeError("boom")).status == 500
