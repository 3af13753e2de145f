"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from thaitax.backend.app import create_app  # noqa: E402
from thaitax.backend.app.auth import AdminCredentials  # noqa: E402
from thaitax.backend.app.services.deduction_repository import (  # noqa: E402
    InMemoryDeductionRepository,
)
from thaitax.backend.config.tax_config import (  # noqa: E402
    DeductionConfig,
    load_deduction_defaults,
)

ADMIN = AdminCredentials(username="adminTax", password="admin!")


@pytest.fixture()
def deduction_config() -> DeductionConfig:
    """Return the deduction settings shipped in ``deductions.yaml``."""

    return load_deduction_defaults()


@pytest.fixture()
def deduction_repository(
    deduction_config: DeductionConfig,
) -> InMemoryDeductionRepository:
    """Provide a fresh in-memory repository per test."""

    return InMemoryDeductionRepository(deduction_config)


@pytest.fixture()
def app(deduction_repository: InMemoryDeductionRepository) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(
        deduction_repository=deduction_repository,
        admin_credentials=ADMIN,
    )
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
