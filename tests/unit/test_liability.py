"""Unit tests for the progressive liability calculator."""

from __future__ import annotations

import pytest

from thaitax.backend.app.services.calculators import compute_liability
from thaitax.backend.config.tax_config import BracketTier, tiers

LABELS = [
    "0-150,000",
    "150,001-500,000",
    "500,001-1,000,000",
    "1,000,001-2,000,000",
    "2,000,001 ขึ้นไป",
]


def _taxes(income: float) -> list[float]:
    return [bracket.tax for bracket in compute_liability(income).brackets]


@pytest.mark.parametrize("income", [-500_000.0, -1.0, 0.0, 1.0, 90_000.0, 150_000.0])
def test_income_up_to_first_threshold_is_untaxed(income: float) -> None:
    result = compute_liability(income)

    assert result.total_tax == 0
    assert all(tax == 0 for tax in _taxes(income))


def test_breakdown_lists_every_tier_in_order() -> None:
    result = compute_liability(0)

    assert [bracket.label for bracket in result.brackets] == LABELS


def test_income_of_500k_is_taxed_in_second_bracket_only() -> None:
    result = compute_liability(500_000)

    assert result.total_tax == pytest.approx(35_000)
    assert _taxes(500_000) == pytest.approx([0, 35_000, 0, 0, 0])


def test_income_of_one_million() -> None:
    result = compute_liability(1_000_000)

    assert result.total_tax == pytest.approx(110_000)
    assert _taxes(1_000_000) == pytest.approx([0, 35_000, 75_000, 0, 0])


def test_top_bracket_taxes_excess_above_two_million() -> None:
    result = compute_liability(3_000_000)

    assert _taxes(3_000_000) == pytest.approx([0, 35_000, 75_000, 200_000, 350_000])
    assert result.total_tax == pytest.approx(660_000)


def test_total_equals_sum_of_brackets() -> None:
    for income in (150_001.0, 440_000.0, 750_000.5, 1_999_999.0, 2_500_000.0):
        result = compute_liability(income)
        assert result.total_tax == pytest.approx(sum(_taxes(income)))


def test_total_tax_is_monotonic() -> None:
    incomes = [-10_000.0] + [step * 25_000.0 for step in range(0, 121)]
    totals = [compute_liability(income).total_tax for income in incomes]

    assert all(later >= earlier for earlier, later in zip(totals, totals[1:]))


def test_custom_bracket_table_is_honoured() -> None:
    schedule = [
        BracketTier(label="low", lower_bound=0, rate=0.0),
        BracketTier(label="high", lower_bound=100, rate=0.5),
    ]

    result = compute_liability(300, schedule)

    assert result.total_tax == pytest.approx(100)
    assert [bracket.label for bracket in result.brackets] == ["low", "high"]


def test_default_table_is_loaded_from_configuration() -> None:
    schedule = tiers()

    assert [tier.label for tier in schedule] == LABELS
    assert [tier.lower_bound for tier in schedule] == [
        0,
        150_000,
        500_000,
        1_000_000,
        2_000_000,
    ]
    assert [tier.rate for tier in schedule] == pytest.approx([0, 0.1, 0.15, 0.2, 0.35])
