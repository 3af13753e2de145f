"""Domain exceptions surfaced to API clients as 400 responses."""

from __future__ import annotations


class TaxValidationError(ValueError):
    """Raised when calculation input violates a deduction or withholding rule."""


class IncomeFileError(TaxValidationError):
    """Raised when an uploaded income file cannot be read in full."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


__all__ = ["IncomeFileError", "TaxValidationError"]
