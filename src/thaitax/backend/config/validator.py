"""Utilities for validating bracket and deduction data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Any, Callable, Sequence

from .tax_config import (
    PERSONAL_DEDUCTION_MIN,
    BracketTable,
    ConfigurationError,
    DeductionConfig,
    load_bracket_table,
    load_deduction_defaults,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def validate_bracket_table(table: BracketTable) -> list[str]:
    """Return contributor-facing issues for ``table`` beyond schema checks."""

    errors: list[str] = []
    scope = "brackets"

    duplicates = [label for label, count in Counter(table.labels).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(scope, f"duplicate bracket labels detected: {sorted(duplicates)}")
        )

    if len(table.tiers) < 2:
        errors.append(_format_scope(scope, "a progressive schedule needs at least two tiers"))

    first = table.tiers[0]
    if first.rate != 0:
        errors.append(
            _format_scope(scope, f"first tier '{first.label}' should be tax-free")
        )

    return errors


def validate_deduction_config(config: DeductionConfig) -> list[str]:
    """Return issues in the deduction caps and defaults."""

    errors: list[str] = []
    scope = "deductions"

    for label, value in {
        "donation_max": config.donation_max,
        "k_receipt_max": config.k_receipt_max,
    }.items():
        if value <= 0:
            errors.append(
                _format_scope(scope, f"{label} must be positive (found {value})")
            )

    if config.personal_deduction_max < PERSONAL_DEDUCTION_MIN:
        errors.append(
            _format_scope(
                scope,
                (
                    "personal_deduction_max must not be below the "
                    f"{PERSONAL_DEDUCTION_MIN:,.0f} minimum"
                ),
            )
        )

    return errors


_TARGETS: dict[str, tuple[Callable[[], Any], Callable[[Any], list[str]]]] = {
    "brackets": (load_bracket_table, validate_bracket_table),
    "deductions": (load_deduction_defaults, validate_deduction_config),
}


def validate_all() -> dict[str, list[str]]:
    """Validate every configuration file and return issues keyed by file."""

    results: dict[str, list[str]] = {}
    for name, (loader, validate) in _TARGETS.items():
        results[name] = validate(loader())
    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the tax bracket and deduction configuration files."
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help=f"Files to validate: {', '.join(sorted(_TARGETS))} (defaults to all)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    targets = args.targets or sorted(_TARGETS)
    unknown = [name for name in targets if name not in _TARGETS]
    if unknown:
        parser.error(f"unknown configuration target(s): {', '.join(unknown)}")

    exit_code = 0

    for name in targets:
        loader, validate = _TARGETS[name]
        try:
            config = loader()
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{name}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate(config)
        if issues:
            exit_code = 1
            print(f"[{name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
