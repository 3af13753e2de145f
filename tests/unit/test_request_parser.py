"""Unit tests for request parsing helpers."""

from __future__ import annotations

from io import BytesIO

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from thaitax.backend.services.request_parser import (
    parse_json_payload,
    parse_uploaded_file,
)


def test_parse_payload_returns_copy_of_object(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/tax/calculations",
        method="POST",
        json={"totalIncome": 500000, "wht": 0},
    ):
        payload = parse_json_payload(request)

    assert payload == {"totalIncome": 500000, "wht": 0}


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/tax/calculations",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_json_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/tax/calculations",
        method="POST",
        data="{broken",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_json_payload(request)


def test_parse_uploaded_file_returns_stream(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/tax/calculations/upload-csv",
        method="POST",
        data={"taxFile": (BytesIO(b"totalIncome,wht,donation\n"), "taxes.csv")},
        content_type="multipart/form-data",
    ):
        stream = parse_uploaded_file(request)
        assert stream.read() == b"totalIncome,wht,donation\n"


def test_parse_uploaded_file_requires_upload(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/tax/calculations/upload-csv",
        method="POST",
        data={},
        content_type="multipart/form-data",
    ):
        with pytest.raises(BadRequest, match="taxFile"):
            parse_uploaded_file(request)
