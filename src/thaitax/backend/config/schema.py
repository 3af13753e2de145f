"""Pydantic models describing the bracket and deduction configuration schema."""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

PERSONAL_DEDUCTION_MIN = 10_000.0
K_RECEIPT_MIN = 0.0


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class BracketTier(ImmutableModel):
    """A single progressive tier taxed at one marginal rate."""

    label: str
    lower_bound: float = Field(alias="lower")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> BracketTier:
        if not self.label.strip():
            raise ConfigurationError("Bracket labels must not be empty")
        if self.lower_bound < 0:
            raise ConfigurationError("Bracket lower bounds must be non-negative")
        if self.rate < 0 or self.rate > 1:
            raise ConfigurationError("Bracket rates must be between 0 and 1")
        return self


class BracketTable(ImmutableModel):
    """Ordered progressive schedule, lowest tier first."""

    tiers: Sequence[BracketTier]

    @model_validator(mode="after")
    def _validate_order(self) -> BracketTable:
        if not self.tiers:
            raise ConfigurationError("Bracket table requires at least one tier")
        if self.tiers[0].lower_bound != 0:
            raise ConfigurationError("The first bracket tier must start at 0")
        for previous, current in zip(self.tiers, self.tiers[1:]):
            if current.lower_bound <= previous.lower_bound:
                raise ConfigurationError(
                    "Bracket tiers must be ordered by strictly increasing lower bounds"
                )
            if current.rate <= previous.rate:
                raise ConfigurationError(
                    f"Bracket '{current.label}' must have a higher rate than "
                    f"'{previous.label}'"
                )
        return self

    @computed_field
    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(tier.label for tier in self.tiers)


class DeductionConfig(ImmutableModel):
    """Snapshot of the deduction defaults and caps applied to calculations."""

    personal_deduction_default: float
    personal_deduction_max: float
    donation_max: float
    k_receipt_default: float
    k_receipt_max: float

    @model_validator(mode="after")
    def _validate_limits(self) -> DeductionConfig:
        for name in type(self).model_fields:
            if getattr(self, name) < 0:
                raise ConfigurationError(f"Deduction setting '{name}' cannot be negative")
        if not (
            PERSONAL_DEDUCTION_MIN
            <= self.personal_deduction_default
            <= self.personal_deduction_max
        ):
            raise ConfigurationError(
                "Personal deduction default must lie between "
                f"{PERSONAL_DEDUCTION_MIN:,.0f} and {self.personal_deduction_max:,.0f}"
            )
        if self.k_receipt_default > self.k_receipt_max:
            raise ConfigurationError(
                "k-receipt default cannot exceed the configured k-receipt maximum"
            )
        return self


__all__ = [
    "BracketTable",
    "BracketTier",
    "ConfigurationError",
    "DeductionConfig",
    "ImmutableModel",
    "K_RECEIPT_MIN",
    "PERSONAL_DEDUCTION_MIN",
]
