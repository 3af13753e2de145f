"""Orchestrate request validation and the tax calculators.

The service turns raw payloads into validated models, feeds them through the
allowance resolver, liability calculator and withholding netter, and hands
back unrounded response models. Rounding for display belongs to the response
builder. Deduction settings always arrive as an explicit snapshot.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from thaitax.backend.app.errors import TaxValidationError
from thaitax.backend.app.models import (
    BatchIncomeRecord,
    BatchTaxResponse,
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxLevel,
    format_validation_error,
)
from thaitax.backend.config.tax_config import DeductionConfig

from .calculators import (
    compute_batch,
    compute_liability,
    net_withholding,
    resolve_deductions,
    validate_withholding,
)

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("THAITAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _log_timings(operation: str, timings: dict[str, float] | None) -> None:
    if timings is None:
        return
    _LOGGER.debug(
        "%s timings (ms): %s",
        operation,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


def _parse_request(
    payload: Mapping[str, Any] | TaxCalculationRequest,
) -> TaxCalculationRequest:
    if isinstance(payload, TaxCalculationRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise TaxValidationError("Payload must be a mapping")
    try:
        return TaxCalculationRequest.model_validate(payload)
    except ValidationError as exc:
        raise TaxValidationError(format_validation_error(exc)) from exc


def calculate_tax(
    payload: Mapping[str, Any] | TaxCalculationRequest,
    config: DeductionConfig,
) -> TaxCalculationResponse:
    """Compute net tax and the per-bracket breakdown for a single request."""

    request = _parse_request(payload)
    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    with _profile_section("deductions", timings):
        total_deductions = resolve_deductions(config, request.allowances)

    validate_withholding(request.total_income, request.withholding_tax)

    taxable_income = request.total_income - total_deductions
    with _profile_section("liability", timings):
        liability = compute_liability(taxable_income)
        netted = net_withholding(
            liability.total_tax, liability.brackets, request.withholding_tax
        )

    _LOGGER.debug(
        "Calculated tax: income=%s deductions=%s taxable=%s gross_tax=%s net_tax=%s",
        request.total_income,
        total_deductions,
        taxable_income,
        liability.total_tax,
        netted.net_total,
    )
    _log_timings("calculate_tax", timings)

    return TaxCalculationResponse(
        tax=netted.net_total,
        tax_level=[
            TaxLevel(level=bracket.label, tax=bracket.tax) for bracket in netted.brackets
        ],
    )


def _parse_records(
    records: Iterable[Mapping[str, Any] | BatchIncomeRecord],
) -> list[BatchIncomeRecord]:
    parsed: list[BatchIncomeRecord] = []
    for index, record in enumerate(records):
        if isinstance(record, BatchIncomeRecord):
            parsed.append(record)
            continue
        try:
            parsed.append(BatchIncomeRecord.model_validate(record))
        except ValidationError as exc:
            raise TaxValidationError(
                format_validation_error(exc, subject=f"income record {index + 1}")
            ) from exc
    return parsed


def calculate_batch(
    records: Iterable[Mapping[str, Any] | BatchIncomeRecord],
    config: DeductionConfig,
) -> BatchTaxResponse:
    """Compute net tax or refunds for every record, or fail for the whole batch.

    All records are validated before any computation so that a single bad
    record yields one error and no partial results.
    """

    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    with _profile_section("validate", timings):
        parsed = _parse_records(records)

    with _profile_section("compute", timings):
        details = compute_batch(parsed, config)

    _LOGGER.debug("Calculated batch of %d record(s)", len(details))
    _log_timings("calculate_batch", timings)

    return BatchTaxResponse(taxes=details)


__all__ = ["calculate_batch", "calculate_tax"]
