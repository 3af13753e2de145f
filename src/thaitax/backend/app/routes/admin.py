"""Administrative endpoints for the mutable deduction defaults."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from thaitax.backend.app.auth import require_admin
from thaitax.backend.app.context import get_deduction_repository
from thaitax.backend.app.errors import TaxValidationError
from thaitax.backend.app.models import DeductionUpdateRequest, format_validation_error
from thaitax.backend.services import build_settings_response, parse_json_payload

blueprint = Blueprint("admin", __name__, url_prefix="/admin")


def _read_amount() -> float:
    payload = parse_json_payload(request)
    try:
        update = DeductionUpdateRequest.model_validate(payload)
    except ValidationError as exc:
        raise TaxValidationError(
            format_validation_error(exc, subject="deduction update")
        ) from exc
    return update.amount


@blueprint.get("/deductions")
@require_admin
def get_deductions() -> tuple[Any, int]:
    """Return the deduction defaults and caps currently in force."""

    return build_settings_response(get_deduction_repository().get_config())


@blueprint.post("/deductions/personal")
@require_admin
def set_personal_deduction() -> tuple[Any, int]:
    """Update the personal deduction applied to every calculation."""

    amount = _read_amount()
    config = get_deduction_repository().set_personal_deduction_default(amount)
    return jsonify({"personalDeduction": config.personal_deduction_default}), 200


@blueprint.post("/deductions/k-receipt")
@require_admin
def set_k_receipt_deduction() -> tuple[Any, int]:
    """Update the amount substituted for over-cap k-receipt allowances."""

    amount = _read_amount()
    config = get_deduction_repository().set_k_receipt_default(amount)
    return jsonify({"kReceipt": config.k_receipt_default}), 200
