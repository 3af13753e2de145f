"""Service-layer helpers for the ThaiTax backend."""

from thaitax.backend.app.services.calculation_service import calculate_batch, calculate_tax

from .income_csv import parse_income_csv
from .request_parser import parse_json_payload, parse_uploaded_file
from .response_builder import (
    build_batch_response,
    build_calculation_response,
    build_settings_response,
)

__all__ = [
    "build_batch_response",
    "build_calculation_response",
    "build_settings_response",
    "calculate_batch",
    "calculate_tax",
    "parse_income_csv",
    "parse_json_payload",
    "parse_uploaded_file",
]
