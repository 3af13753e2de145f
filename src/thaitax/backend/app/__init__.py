"""Application factory for ThaiTax backend services."""

from __future__ import annotations

import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from thaitax.backend.config.tax_config import (
    ConfigurationError,
    load_bracket_table,
    load_deduction_defaults,
)
from thaitax.backend.version import get_project_version

from .auth import ADMIN_CREDENTIALS_KEY, AdminCredentials, load_admin_credentials
from .context import DEDUCTIONS_KEY
from .errors import IncomeFileError
from .http import problem_response
from .routes import register_routes
from .services.deduction_repository import DeductionRepository, build_deduction_repository


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(
    *,
    deduction_repository: DeductionRepository | None = None,
    admin_credentials: AdminCredentials | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    Both collaborators default to what the environment describes: the
    deduction repository honours ``THAITAX_DEDUCTIONS_DB`` and admin
    credentials come from ``ADMIN_USERNAME``/``ADMIN_PASSWORD``.
    """

    app = Flask(__name__)

    # Fail at start-up rather than on the first request when the bracket data
    # is broken.
    load_bracket_table()

    if deduction_repository is None:
        deduction_repository = build_deduction_repository(load_deduction_defaults())
    app.extensions[DEDUCTIONS_KEY] = deduction_repository

    if admin_credentials is None:
        admin_credentials = load_admin_credentials()
    if admin_credentials is None:
        warn(
            "ADMIN_USERNAME/ADMIN_PASSWORD are not set; admin endpoints will reject "
            "every request.",
            stacklevel=1,
        )
    app.extensions[ADMIN_CREDENTIALS_KEY] = admin_credentials

    allowed_origins = _parse_allowed_origins(os.getenv("THAITAX_ALLOWED_ORIGINS"))
    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        return jsonify({"status": "ok", "version": get_project_version()})

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(IncomeFileError)
    def handle_income_file_error(error: IncomeFileError):
        """Report unreadable uploads without computing any part of the batch."""

        return problem_response(
            "invalid_file", status=400, message=str(error)
        ).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        """Surface rejected configuration updates to administrators."""

        return problem_response(
            "configuration_error", status=400, message=str(error)
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface domain validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app
