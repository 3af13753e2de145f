"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    K_RECEIPT_MIN,
    PERSONAL_DEDUCTION_MIN,
    BracketTable,
    BracketTier,
    ConfigurationError,
    DeductionConfig,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
BRACKETS_FILE = "brackets.yaml"
DEDUCTIONS_FILE = "deductions.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _resolve(filename: str) -> Path:
    path = CONFIG_DIRECTORY / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file missing: {path.name}")
    return path


@lru_cache(maxsize=1)
def load_bracket_table() -> BracketTable:
    """Load and cache the progressive bracket schedule."""

    raw_table = _load_yaml(_resolve(BRACKETS_FILE))

    try:
        return BracketTable.model_validate(raw_table)
    except ValidationError as error:
        raise ConfigurationError(f"Bracket table validation failed: {error}") from error


def tiers() -> Sequence[BracketTier]:
    """Return the bracket tiers ordered by ascending lower bound."""

    return load_bracket_table().tiers


def load_deduction_defaults() -> DeductionConfig:
    """Read the initial deduction settings from disk.

    The result is not cached: repositories call this once at start-up and own
    the mutable state afterwards.
    """

    raw_defaults = _load_yaml(_resolve(DEDUCTIONS_FILE))

    try:
        return DeductionConfig.model_validate(raw_defaults)
    except ValidationError as error:
        raise ConfigurationError(f"Deduction settings validation failed: {error}") from error


__all__ = [
    "BRACKETS_FILE",
    "BracketTable",
    "BracketTier",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "DEDUCTIONS_FILE",
    "DeductionConfig",
    "K_RECEIPT_MIN",
    "PERSONAL_DEDUCTION_MIN",
    "load_bracket_table",
    "load_deduction_defaults",
    "tiers",
]
