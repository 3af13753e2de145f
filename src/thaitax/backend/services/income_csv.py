"""Reader turning uploaded CSV income files into batch records."""

from __future__ import annotations

import csv
import io
import logging
import math
from typing import IO

from thaitax.backend.app.errors import IncomeFileError
from thaitax.backend.app.models import BatchIncomeRecord

_LOGGER = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("totalIncome", "wht", "donation")


def _parse_amount(raw: str | None, column: str, line: int) -> float:
    value = (raw or "").strip()
    if not value:
        raise IncomeFileError(f"missing value for '{column}'", line=line)
    message = f"'{column}' must be numeric (found {value!r})"
    try:
        amount = float(value)
    except ValueError as exc:
        raise IncomeFileError(message, line=line) from exc
    if not math.isfinite(amount):
        raise IncomeFileError(message, line=line)
    return amount


def _decode(stream: IO[bytes] | IO[str]) -> str:
    content = stream.read()
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise IncomeFileError("file must be UTF-8 encoded") from exc
    return content


def parse_income_csv(stream: IO[bytes] | IO[str]) -> list[BatchIncomeRecord]:
    """Read every row of ``stream`` into a :class:`BatchIncomeRecord`.

    The header must name ``totalIncome``, ``wht`` and ``donation``; other
    columns are ignored and blank lines skipped. Any unreadable row aborts the
    whole file with :class:`IncomeFileError`.
    """

    reader = csv.reader(io.StringIO(_decode(stream)))

    header: list[str] | None = None
    for row in reader:
        if any(cell.strip() for cell in row):
            header = [cell.strip() for cell in row]
            break
    if header is None:
        raise IncomeFileError("file is empty")

    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise IncomeFileError(
            f"missing required column(s): {', '.join(missing)}", line=reader.line_num
        )
    positions = {column: header.index(column) for column in REQUIRED_COLUMNS}

    records: list[BatchIncomeRecord] = []
    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        line = reader.line_num
        if len(row) != len(header):
            raise IncomeFileError(
                f"expected {len(header)} value(s), found {len(row)}", line=line
            )
        amounts = {
            column: _parse_amount(row[position], column, line)
            for column, position in positions.items()
        }
        records.append(
            BatchIncomeRecord(
                total_income=amounts["totalIncome"],
                withholding_tax=amounts["wht"],
                donation=amounts["donation"],
            )
        )

    _LOGGER.debug("Parsed %d income record(s) from upload", len(records))
    return records
