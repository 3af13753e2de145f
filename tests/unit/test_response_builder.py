"""Unit tests for response formatting helpers."""

from __future__ import annotations

from flask import Flask

from thaitax.backend.app.models import (
    BatchTaxDetail,
    BatchTaxResponse,
    TaxCalculationResponse,
    TaxLevel,
)
from thaitax.backend.services.response_builder import (
    build_calculation_response,
    build_settings_response,
    serialise_batch,
    serialise_calculation,
)
from thaitax.backend.config.tax_config import DeductionConfig


def test_amounts_are_rounded_to_one_decimal() -> None:
    result = TaxCalculationResponse(
        tax=29_000.04,
        tax_level=[TaxLevel(level="150,001-500,000", tax=1_234.56)],
    )

    assert serialise_calculation(result) == {
        "tax": 29_000.0,
        "taxLevel": [{"level": "150,001-500,000", "tax": 1_234.6}],
    }


def test_batch_omits_absent_refunds() -> None:
    result = BatchTaxResponse(
        taxes=[
            BatchTaxDetail(total_income=500_000, tax=29_000, tax_refund=None),
            BatchTaxDetail(total_income=100_000, tax=0, tax_refund=10_000.04),
        ]
    )

    assert serialise_batch(result) == {
        "taxes": [
            {"totalIncome": 500_000.0, "tax": 29_000.0},
            {"totalIncome": 100_000.0, "tax": 0.0, "taxRefund": 10_000.0},
        ]
    }


def test_build_calculation_response_returns_json(app: Flask) -> None:
    result = TaxCalculationResponse(tax=-1.25, tax_level=[])

    with app.app_context():
        response, status = build_calculation_response(result)

    assert status == 200
    assert response.get_json() == {"tax": -1.2, "taxLevel": []}


def test_build_settings_response_uses_client_keys(
    app: Flask, deduction_config: DeductionConfig
) -> None:
    with app.app_context():
        response, status = build_settings_response(deduction_config)

    assert status == 200
    assert response.get_json() == {
        "personalDeduction": 60_000.0,
        "personalDeductionMax": 100_000.0,
        "donationMax": 100_000.0,
        "kReceipt": 50_000.0,
        "kReceiptMax": 100_000.0,
    }
