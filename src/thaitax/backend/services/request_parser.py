"""Helpers for normalising incoming calculation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import IO, Any

from flask import Request
from werkzeug.exceptions import BadRequest

UPLOAD_FIELD = "taxFile"


def parse_json_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req`` or raise :class:`BadRequest`."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    return dict(data)


def parse_uploaded_file(req: Request, field: str = UPLOAD_FIELD) -> IO[bytes]:
    """Return the binary stream of the file uploaded under ``field``."""

    upload = req.files.get(field)
    if upload is None or not upload.filename:
        raise BadRequest(f"No file uploaded in form field '{field}'")
    return upload.stream
