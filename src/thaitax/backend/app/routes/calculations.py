"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from thaitax.backend.app.context import get_deduction_repository
from thaitax.backend.services import (
    build_batch_response,
    build_calculation_response,
    calculate_batch,
    calculate_tax,
    parse_income_csv,
    parse_json_payload,
    parse_uploaded_file,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1/tax")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Calculate net tax for the submitted income, withholding and allowances."""

    payload = parse_json_payload(request)
    config = get_deduction_repository().get_config()
    result = calculate_tax(payload, config)

    return build_calculation_response(result)


@blueprint.post("/calculations/upload-csv")
def create_batch_calculation() -> tuple[Any, int]:
    """Calculate net tax or refunds for every row of an uploaded CSV file."""

    stream = parse_uploaded_file(request)
    records = parse_income_csv(stream)
    config = get_deduction_repository().get_config()
    result = calculate_batch(records, config)

    return build_batch_response(result)
