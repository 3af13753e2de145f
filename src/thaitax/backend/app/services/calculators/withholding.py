"""Netting of withholding tax against computed liability."""

from __future__ import annotations

from typing import Sequence

from thaitax.backend.app.errors import TaxValidationError
from thaitax.backend.app.models import BracketTax, NetLiability

INVALID_WHT_ERROR = "Invalid WHT value"


def validate_withholding(total_income: float, withholding_tax: float) -> None:
    """Reject withholding that is negative or larger than the income it came from."""

    if not 0 <= withholding_tax <= total_income:
        raise TaxValidationError(INVALID_WHT_ERROR)


def net_withholding(
    total_tax: float, brackets: Sequence[BracketTax], withholding_tax: float
) -> NetLiability:
    """Subtract ``withholding_tax`` from the total and from every bracket.

    The total may go negative, which callers read as a refund. Each bracket
    has the full withholding amount subtracted and is floored at zero, so the
    netted brackets do not in general sum to the netted total.
    """

    netted = tuple(
        BracketTax(label=bracket.label, tax=max(0.0, bracket.tax - withholding_tax))
        for bracket in brackets
    )
    return NetLiability(net_total=total_tax - withholding_tax, brackets=netted)
