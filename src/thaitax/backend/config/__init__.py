"""Bracket and deduction configuration loading and validation."""
