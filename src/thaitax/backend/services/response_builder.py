"""Utilities for serialising calculation responses.

Calculators work with unrounded floats; amounts are rounded to one decimal
place only here, right before they are rendered as JSON.
"""

from __future__ import annotations

from typing import Any, Tuple

from flask import jsonify

from thaitax.backend.app.models import (
    BatchTaxResponse,
    DeductionSettingsResponse,
    TaxCalculationResponse,
)
from thaitax.backend.app.services.calculators import round_display
from thaitax.backend.config.tax_config import DeductionConfig

ResponseTuple = Tuple[Any, int]


def serialise_calculation(result: TaxCalculationResponse) -> dict[str, Any]:
    """Return the JSON-ready mapping for a single calculation."""

    return {
        "tax": round_display(result.tax),
        "taxLevel": [
            {"level": level.level, "tax": round_display(level.tax)}
            for level in result.tax_level
        ],
    }


def serialise_batch(result: BatchTaxResponse) -> dict[str, Any]:
    """Return the JSON-ready mapping for a batch, omitting zero refunds."""

    taxes: list[dict[str, Any]] = []
    for detail in result.taxes:
        entry: dict[str, Any] = {
            "totalIncome": round_display(detail.total_income),
            "tax": round_display(detail.tax),
        }
        if detail.tax_refund:
            entry["taxRefund"] = round_display(detail.tax_refund)
        taxes.append(entry)
    return {"taxes": taxes}


def build_calculation_response(result: TaxCalculationResponse) -> ResponseTuple:
    """Return a Flask JSON response for a single calculation ``result``."""

    return jsonify(serialise_calculation(result)), 200


def build_batch_response(result: BatchTaxResponse) -> ResponseTuple:
    """Return a Flask JSON response for a batch ``result``."""

    return jsonify(serialise_batch(result)), 200


def build_settings_response(config: DeductionConfig) -> ResponseTuple:
    """Return the current deduction settings as a Flask JSON response."""

    settings = DeductionSettingsResponse(
        personal_deduction=config.personal_deduction_default,
        personal_deduction_max=config.personal_deduction_max,
        donation_max=config.donation_max,
        k_receipt=config.k_receipt_default,
        k_receipt_max=config.k_receipt_max,
    )
    return jsonify(settings.model_dump(mode="json", by_alias=True)), 200
