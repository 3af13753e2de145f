"""Calculation services and the deduction repositories."""
