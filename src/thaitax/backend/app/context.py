"""Accessors for per-application state stored on ``app.extensions``."""

from __future__ import annotations

from flask import current_app

from thaitax.backend.app.services.deduction_repository import DeductionRepository

DEDUCTIONS_KEY = "thaitax.deductions"


def get_deduction_repository() -> DeductionRepository:
    """Return the deduction repository bound to the current application."""

    return current_app.extensions[DEDUCTIONS_KEY]


__all__ = ["DEDUCTIONS_KEY", "get_deduction_repository"]
