"""Batch netting of uploaded income records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Sequence

from thaitax.backend.app.models import BatchIncomeRecord, BatchTaxDetail
from thaitax.backend.config.tax_config import BracketTier, DeductionConfig

from .liability import compute_liability


def compute_batch_detail(
    record: BatchIncomeRecord,
    config: DeductionConfig,
    brackets: Sequence[BracketTier] | None = None,
) -> BatchTaxDetail:
    """Return the net tax, or the refund due, for a single income record.

    Withholding is taken off taxable income as well as off the computed tax.
    """

    taxable_income = (
        record.total_income
        - config.personal_deduction_default
        - record.donation
        - record.withholding_tax
    )
    liability = compute_liability(taxable_income, brackets)
    net_tax = liability.total_tax - record.withholding_tax

    tax_refund: float | None = None
    if net_tax < 0:
        tax_refund = -net_tax
        net_tax = 0.0

    return BatchTaxDetail(
        total_income=record.total_income,
        tax=net_tax,
        tax_refund=tax_refund,
    )


def compute_batch(
    records: Iterable[BatchIncomeRecord],
    config: DeductionConfig,
    brackets: Sequence[BracketTier] | None = None,
) -> list[BatchTaxDetail]:
    """Compute one :class:`BatchTaxDetail` per record, preserving input order."""

    return [compute_batch_detail(record, config, brackets) for record in records]
