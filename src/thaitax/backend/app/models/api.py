"""Pydantic models describing the public API surface."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = [
    "AllowanceType",
    "AllowanceDeclaration",
    "TaxCalculationRequest",
    "TaxLevel",
    "TaxCalculationResponse",
    "BatchIncomeRecord",
    "BatchTaxDetail",
    "BatchTaxResponse",
    "DeductionUpdateRequest",
    "DeductionSettingsResponse",
    "format_validation_error",
]


class AllowanceType(str, Enum):
    """Allowance categories with dedicated resolution rules."""

    PERSONAL = "personal"
    DONATION = "donation"
    K_RECEIPT = "k-receipt"
    OTHER = "other"

    @classmethod
    def from_label(cls, value: str) -> AllowanceType:
        """Map a declared type to a category, treating unknown labels as ``other``."""

        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, allow_inf_nan=False
    )


class AllowanceDeclaration(_ApiModel):
    """A single allowance claimed by the taxpayer."""

    allowance_type: str = Field(alias="allowanceType", min_length=1)
    # Sign is checked by the allowance resolver so the rejection carries its
    # own message rather than a generic schema error.
    amount: float

    @property
    def kind(self) -> AllowanceType:
        return AllowanceType.from_label(self.allowance_type)


class TaxCalculationRequest(_ApiModel):
    """Income, withholding and allowances submitted for a single calculation."""

    total_income: float = Field(alias="totalIncome")
    withholding_tax: float = Field(default=0.0, alias="wht")
    allowances: list[AllowanceDeclaration] = Field(default_factory=list)


class TaxLevel(_ApiModel):
    """Tax attributed to one bracket of the progressive schedule."""

    level: str
    tax: float


class TaxCalculationResponse(_ApiModel):
    """Net tax and per-bracket breakdown returned to the client."""

    tax: float
    tax_level: list[TaxLevel] = Field(alias="taxLevel")


class BatchIncomeRecord(_ApiModel):
    """One row of an uploaded income file."""

    total_income: float = Field(alias="totalIncome")
    withholding_tax: float = Field(default=0.0, alias="wht")
    donation: float = 0.0


class BatchTaxDetail(_ApiModel):
    """Net tax owed, or refund due, for one batch record."""

    total_income: float = Field(alias="totalIncome")
    tax: float
    tax_refund: float | None = Field(default=None, alias="taxRefund")


class BatchTaxResponse(_ApiModel):
    taxes: list[BatchTaxDetail]


class DeductionUpdateRequest(_ApiModel):
    """Payload accepted by the administrative deduction endpoints."""

    amount: float


class DeductionSettingsResponse(_ApiModel):
    """Current deduction defaults and caps, keyed the way clients expect."""

    personal_deduction: float = Field(alias="personalDeduction")
    personal_deduction_max: float = Field(alias="personalDeductionMax")
    donation_max: float = Field(alias="donationMax")
    k_receipt: float = Field(alias="kReceipt")
    k_receipt_max: float = Field(alias="kReceiptMax")


def format_validation_error(
    error: ValidationError, subject: str = "calculation payload"
) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid {subject}: {details}"
