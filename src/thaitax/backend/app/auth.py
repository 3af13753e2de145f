"""HTTP basic authentication for the administrative endpoints."""

from __future__ import annotations

import hmac
import logging
import os
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from flask import current_app, request

from .http import problem_response

_LOGGER = logging.getLogger(__name__)

ADMIN_CREDENTIALS_KEY = "thaitax.admin_credentials"

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class AdminCredentials:
    username: str
    password: str

    def matches(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), self.username.encode())
        password_ok = hmac.compare_digest(password.encode(), self.password.encode())
        return user_ok and password_ok


def load_admin_credentials() -> AdminCredentials | None:
    """Read admin credentials from ``ADMIN_USERNAME`` and ``ADMIN_PASSWORD``."""

    username = os.getenv("ADMIN_USERNAME", "").strip()
    password = os.getenv("ADMIN_PASSWORD", "")
    if not username or not password:
        return None
    return AdminCredentials(username=username, password=password)


def _unauthorised() -> tuple[Any, ...]:
    return problem_response(
        "unauthorized",
        status=401,
        message="Administrator credentials required",
        headers={"WWW-Authenticate": 'Basic realm="thaitax-admin"'},
    ).to_response()


def require_admin(view: F) -> F:
    """Reject requests whose basic auth header does not match the admin login."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        credentials: AdminCredentials | None = current_app.extensions.get(
            ADMIN_CREDENTIALS_KEY
        )
        auth = request.authorization
        if credentials is None:
            _LOGGER.warning("Admin request rejected: no admin credentials configured")
            return _unauthorised()
        if (
            auth is None
            or auth.type != "basic"
            or not credentials.matches(auth.username or "", auth.password or "")
        ):
            _LOGGER.warning("Admin request rejected for %s", request.path)
            return _unauthorised()
        return view(*args, **kwargs)

    return cast(F, wrapper)


__all__ = [
    "ADMIN_CREDENTIALS_KEY",
    "AdminCredentials",
    "load_admin_credentials",
    "require_admin",
]
