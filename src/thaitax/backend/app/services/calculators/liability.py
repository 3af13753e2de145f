"""Progressive liability calculation over the bracket table."""

from __future__ import annotations

from typing import Sequence

from thaitax.backend.app.models import BracketTax, LiabilityResult
from thaitax.backend.config.tax_config import BracketTier, tiers


def compute_liability(
    taxable_income: float, brackets: Sequence[BracketTier] | None = None
) -> LiabilityResult:
    """Return the total tax on ``taxable_income`` and the tax per bracket.

    Tiers are walked from the top down: each tier taxes whatever income sits
    above its lower bound, then the remaining income is clamped to that bound
    before the next tier is considered. Negative income yields zero tax.
    """

    schedule = tiers() if brackets is None else brackets

    remaining = taxable_income
    total = 0.0
    taxes = [0.0 for _ in schedule]

    for index in range(len(schedule) - 1, -1, -1):
        tier = schedule[index]
        if remaining > tier.lower_bound:
            taxes[index] = (remaining - tier.lower_bound) * tier.rate
            total += taxes[index]
            remaining = tier.lower_bound

    return LiabilityResult(
        total_tax=total,
        brackets=tuple(
            BracketTax(label=tier.label, tax=tax) for tier, tax in zip(schedule, taxes)
        ),
    )
