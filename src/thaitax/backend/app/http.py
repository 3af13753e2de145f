"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """JSON error payload with an ``error`` code and optional message."""

    error: str
    status: int
    message: str | None = None
    headers: Mapping[str, str] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        return payload

    def to_response(self) -> tuple[Any, int] | tuple[Any, int, dict[str, str]]:
        """Convert the problem payload into a Flask response tuple."""

        if self.headers:
            return jsonify(self.as_dict()), self.status, dict(self.headers)
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse` for ``error``."""

    return ProblemResponse(error=error, status=status, message=message, headers=headers)


__all__ = ["ProblemResponse", "problem_response"]
