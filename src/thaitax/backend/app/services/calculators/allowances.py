"""Resolution of declared allowances into a total deduction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from thaitax.backend.app.errors import TaxValidationError
from thaitax.backend.app.models import AllowanceDeclaration, AllowanceType
from thaitax.backend.config.tax_config import PERSONAL_DEDUCTION_MIN, DeductionConfig

from .utils import clamp

_LOGGER = logging.getLogger(__name__)

NEGATIVE_AMOUNT_ERROR = "Deduction amounts cannot be negative"


def _resolve_amount(config: DeductionConfig, allowance: AllowanceDeclaration) -> float:
    amount = allowance.amount
    kind = allowance.kind

    if kind is AllowanceType.PERSONAL:
        if amount < PERSONAL_DEDUCTION_MIN or amount > config.personal_deduction_max:
            raise TaxValidationError(
                "Personal deduction must be between "
                f"{PERSONAL_DEDUCTION_MIN:,.0f} and {config.personal_deduction_max:,.0f}"
            )
        return amount

    if kind is AllowanceType.DONATION:
        return clamp(amount, config.donation_max)

    if kind is AllowanceType.K_RECEIPT:
        # Amounts over the cap fall back to the configured default rather than
        # being clamped to the cap.
        if amount > config.k_receipt_max and amount > 0:
            return config.k_receipt_default
        return amount

    return amount


def resolve_deductions(
    config: DeductionConfig, declarations: Iterable[AllowanceDeclaration]
) -> float:
    """Sum the personal default with every declared allowance.

    Declarations are processed in order; the first invalid one raises
    :class:`TaxValidationError` and nothing is applied. A valid ``personal``
    allowance is added on top of the configured default.
    """

    total = config.personal_deduction_default
    for allowance in declarations:
        if allowance.amount < 0:
            raise TaxValidationError(NEGATIVE_AMOUNT_ERROR)
        resolved = _resolve_amount(config, allowance)
        if resolved != allowance.amount:
            _LOGGER.debug(
                "Allowance %s adjusted from %s to %s",
                allowance.allowance_type,
                allowance.amount,
                resolved,
            )
        total += resolved

    return total
