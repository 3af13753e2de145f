"""Utility helpers for calculator modules."""

from __future__ import annotations


def clamp(value: float, upper: float) -> float:
    """Return ``value`` capped at ``upper``."""

    return upper if value > upper else value


def round_display(value: float) -> float:
    """Round monetary amounts to the single decimal shown to clients."""

    return round(value, 1)
