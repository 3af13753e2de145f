"""Typed request/response models shared across the calculation services.

Pydantic models validate what crosses the HTTP boundary; the lightweight
dataclasses below carry unrounded intermediate results between the
calculators so that rounding only ever happens when a response is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .api import (
    AllowanceDeclaration,
    AllowanceType,
    BatchIncomeRecord,
    BatchTaxDetail,
    BatchTaxResponse,
    DeductionSettingsResponse,
    DeductionUpdateRequest,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxLevel,
    format_validation_error,
)

__all__ = [
    "AllowanceDeclaration",
    "AllowanceType",
    "BatchIncomeRecord",
    "BatchTaxDetail",
    "BatchTaxResponse",
    "BracketTax",
    "DeductionSettingsResponse",
    "DeductionUpdateRequest",
    "LiabilityResult",
    "NetLiability",
    "TaxCalculationRequest",
    "TaxCalculationResponse",
    "TaxLevel",
    "format_validation_error",
]


@dataclass(frozen=True)
class BracketTax:
    """Tax contributed by a single bracket tier."""

    label: str
    tax: float


@dataclass(frozen=True)
class LiabilityResult:
    """Total tax and its per-bracket breakdown, lowest tier first."""

    total_tax: float
    brackets: Sequence[BracketTax]


@dataclass(frozen=True)
class NetLiability:
    """Liability after withholding has been netted off."""

    net_total: float
    brackets: Sequence[BracketTax]
