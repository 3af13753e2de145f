"""Unit tests for withholding tax netting."""

from __future__ import annotations

import pytest

from thaitax.backend.app.errors import TaxValidationError
from thaitax.backend.app.models import BracketTax
from thaitax.backend.app.services.calculators import (
    compute_liability,
    net_withholding,
    validate_withholding,
)


def test_withholding_is_subtracted_in_full_from_each_bracket() -> None:
    brackets = [BracketTax("A", 20_000), BracketTax("B", 30_000)]

    result = net_withholding(50_000, brackets, 25_000)

    assert result.net_total == 25_000
    assert [bracket.tax for bracket in result.brackets] == [0, 5_000]
    # The netted brackets do not add up to the netted total.
    assert sum(bracket.tax for bracket in result.brackets) != result.net_total


def test_total_may_go_negative() -> None:
    liability = compute_liability(300_000)

    result = net_withholding(liability.total_tax, liability.brackets, 20_000)

    assert result.net_total == pytest.approx(-5_000)
    assert result.net_total < 0
    assert all(bracket.tax == 0 for bracket in result.brackets)


def test_zero_withholding_leaves_figures_unchanged() -> None:
    liability = compute_liability(1_000_000)

    result = net_withholding(liability.total_tax, liability.brackets, 0)

    assert result.net_total == liability.total_tax
    assert list(result.brackets) == list(liability.brackets)
    assert result.net_total >= 0


def test_labels_are_preserved() -> None:
    liability = compute_liability(600_000)

    result = net_withholding(liability.total_tax, liability.brackets, 1_000)

    assert [b.label for b in result.brackets] == [b.label for b in liability.brackets]


@pytest.mark.parametrize(
    ("income", "wht"),
    [
        (100_000, -1),
        (100_000, 100_000.5),
        (0, 1),
        (100_000, float("nan")),
        (100_000, float("inf")),
    ],
)
def test_invalid_withholding_is_rejected(income: float, wht: float) -> None:
    with pytest.raises(TaxValidationError, match="Invalid WHT value"):
        validate_withholding(income, wht)


@pytest.mark.parametrize(("income", "wht"), [(100_000, 0), (100_000, 100_000)])
def test_withholding_bounds_are_inclusive(income: float, wht: float) -> None:
    validate_withholding(income, wht)
