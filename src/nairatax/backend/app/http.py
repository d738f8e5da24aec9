"""JSON error payloads shared by the application error handlers and blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify
from werkzeug.exceptions import BadRequest

# Checked in order; ``ConfigurationError`` is a ``ValueError`` and lands on 400.
_EXCEPTION_PROBLEMS: tuple[tuple[type[Exception], str, HTTPStatus], ...] = (
    (BadRequest, "bad_request", HTTPStatus.BAD_REQUEST),
    (FileNotFoundError, "not_found", HTTPStatus.NOT_FOUND),
    (ValueError, "validation_error", HTTPStatus.BAD_REQUEST),
)


@dataclass(frozen=True)
class ProblemResponse:
    """Error body of the form ``{"error": code, "message": text, ...}``."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        body.update(self.extra)
        return body

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), int(self.status)


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; keyword extras are merged into the body."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra)


def _describe(error: Exception) -> str:
    if isinstance(error, BadRequest):
        return error.description or "Invalid request"
    if isinstance(error, FileNotFoundError) and error.args:
        return str(error.args[0])
    return str(error)


def problem_from_exception(error: Exception) -> ProblemResponse:
    """Translate an exception raised while serving a request into a problem body.

    Anything outside the known request, lookup and validation failures becomes
    an opaque ``internal_error`` so that internals never reach the client.
    """

    for exc_type, code, status in _EXCEPTION_PROBLEMS:
        if isinstance(error, exc_type):
            return problem_response(code, status=status, message=_describe(error))
    return problem_response(
        "internal_error",
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        message="Unexpected error",
    )


__all__ = ["ProblemResponse", "problem_from_exception", "problem_response"]
