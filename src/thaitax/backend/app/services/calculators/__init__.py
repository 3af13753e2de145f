"""Domain-specific calculation helpers."""

from .allowances import resolve_deductions
from .batch import compute_batch, compute_batch_detail
from .liability import compute_liability
from .utils import clamp, round_display
from .withholding import net_withholding, validate_withholding

__all__ = [
    "clamp",
    "compute_batch",
    "compute_batch_detail",
    "compute_liability",
    "net_withholding",
    "resolve_deductions",
    "round_display",
    "validate_withholding",
]
