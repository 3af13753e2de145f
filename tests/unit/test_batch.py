"""Unit tests for batch netting."""

from __future__ import annotations

import pytest

from thaitax.backend.app.models import BatchIncomeRecord
from thaitax.backend.app.services.calculators import compute_batch
from thaitax.backend.config.tax_config import DeductionConfig


def record(total_income: float, wht: float = 0.0, donation: float = 0.0) -> BatchIncomeRecord:
    return BatchIncomeRecord(total_income=total_income, withholding_tax=wht, donation=donation)


def test_withholding_above_tax_becomes_refund(deduction_config: DeductionConfig) -> None:
    [detail] = compute_batch([record(100_000, wht=10_000)], deduction_config)

    assert detail.total_income == 100_000
    assert detail.tax == 0
    assert detail.tax_refund == pytest.approx(10_000)


def test_withholding_reduces_taxable_income_and_tax(
    deduction_config: DeductionConfig,
) -> None:
    # taxable = 500,000 - 60,000 - 0 - 25,000 = 415,000 -> tax 26,500
    [detail] = compute_batch([record(500_000, wht=25_000)], deduction_config)

    assert detail.tax == pytest.approx(1_500)
    assert detail.tax_refund is None


def test_donation_is_deducted_without_cap(deduction_config: DeductionConfig) -> None:
    # taxable = 1,000,000 - 60,000 - 200,000 = 740,000 -> 35,000 + 36,000
    [detail] = compute_batch([record(1_000_000, donation=200_000)], deduction_config)

    assert detail.tax == pytest.approx(71_000)
    assert detail.tax_refund is None


def test_exact_offset_produces_no_refund(deduction_config: DeductionConfig) -> None:
    # taxable = 500,000 - 60,000 - 5,100 - 25,900 = 409,000 -> tax 25,900
    details = compute_batch(
        [record(500_000, wht=25_900, donation=5_100)], deduction_config
    )

    assert details[0].tax == pytest.approx(0)
    assert details[0].tax_refund is None


def test_order_is_preserved(deduction_config: DeductionConfig) -> None:
    incomes = [900_000.0, 100_000.0, 2_500_000.0, 400_000.0]

    details = compute_batch([record(income) for income in incomes], deduction_config)

    assert [detail.total_income for detail in details] == incomes


def test_uses_current_personal_default(deduction_config: DeductionConfig) -> None:
    config = deduction_config.model_copy(update={"personal_deduction_default": 100_000})

    [detail] = compute_batch([record(600_000)], config)

    # taxable = 500,000
    assert detail.tax == pytest.approx(35_000)


def test_empty_batch(deduction_config: DeductionConfig) -> None:
    assert compute_batch([], deduction_config) == []
