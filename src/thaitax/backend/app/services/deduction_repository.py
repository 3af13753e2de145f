"""Thread-safe storage for the mutable deduction defaults.

Calculations never read the defaults from module state: routes fetch a
:class:`DeductionConfig` snapshot from a repository and pass it explicitly to
the calculators. Only the personal and k-receipt defaults change at runtime;
the caps come from ``deductions.yaml`` and stay fixed for the process lifetime.
"""

from __future__ import annotations

import logging
import math
import os
import sqlite3
from contextlib import closing, contextmanager
from threading import Lock
from typing import Iterator, Protocol

from thaitax.backend.config.tax_config import (
    K_RECEIPT_MIN,
    PERSONAL_DEDUCTION_MIN,
    ConfigurationError,
    DeductionConfig,
)

_LOGGER = logging.getLogger(__name__)

PERSONAL_KEY = "personal"
K_RECEIPT_KEY = "k-receipt"


def _check_range(amount: float, lower: float, upper: float) -> None:
    if not (math.isfinite(amount) and lower <= amount <= upper):
        raise ConfigurationError(f"Amount must be between {lower:,.0f} and {upper:,.0f}")


def _validate_personal(config: DeductionConfig, amount: float) -> None:
    _check_range(amount, PERSONAL_DEDUCTION_MIN, config.personal_deduction_max)


def _validate_k_receipt(config: DeductionConfig, amount: float) -> None:
    _check_range(amount, K_RECEIPT_MIN, config.k_receipt_max)


class DeductionRepository(Protocol):
    """Interface shared by the deduction repositories."""

    def get_config(self) -> DeductionConfig: ...

    def set_personal_deduction_default(self, amount: float) -> DeductionConfig: ...

    def set_k_receipt_default(self, amount: float) -> DeductionConfig: ...


class InMemoryDeductionRepository:
    """Lock-guarded in-process holder of the current deduction settings."""

    def __init__(self, initial: DeductionConfig) -> None:
        self._config = initial
        self._lock = Lock()

    def get_config(self) -> DeductionConfig:
        with self._lock:
            return self._config

    def set_personal_deduction_default(self, amount: float) -> DeductionConfig:
        with self._lock:
            _validate_personal(self._config, amount)
            self._config = self._config.model_copy(
                update={"personal_deduction_default": amount}
            )
            updated = self._config
        _LOGGER.info("Personal deduction default set to %s", amount)
        return updated

    def set_k_receipt_default(self, amount: float) -> DeductionConfig:
        with self._lock:
            _validate_k_receipt(self._config, amount)
            self._config = self._config.model_copy(update={"k_receipt_default": amount})
            updated = self._config
        _LOGGER.info("k-receipt default set to %s", amount)
        return updated


class SQLiteDeductionRepository:
    """SQLite-backed repository keeping the mutable defaults across restarts."""

    def __init__(self, path: str | os.PathLike[str], initial: DeductionConfig) -> None:
        self._path = str(path)
        self._limits = initial
        self._lock = Lock()
        self._initialise()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._path, check_same_thread=False)
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        return connection

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and is always closed."""

        with closing(self._connect()) as connection, connection:
            yield connection

    def _initialise(self) -> None:
        with self._lock, self._transaction() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS allowances (
                    allowance_type TEXT PRIMARY KEY,
                    amount REAL NOT NULL
                )
                """
            )
            connection.executemany(
                "INSERT OR IGNORE INTO allowances (allowance_type, amount) VALUES (?, ?)",
                (
                    (PERSONAL_KEY, self._limits.personal_deduction_default),
                    (K_RECEIPT_KEY, self._limits.k_receipt_default),
                ),
            )

    def _read_locked(self) -> DeductionConfig:
        with self._transaction() as connection:
            rows = dict(
                connection.execute("SELECT allowance_type, amount FROM allowances")
            )
        return self._limits.model_copy(
            update={
                "personal_deduction_default": float(
                    rows.get(PERSONAL_KEY, self._limits.personal_deduction_default)
                ),
                "k_receipt_default": float(
                    rows.get(K_RECEIPT_KEY, self._limits.k_receipt_default)
                ),
            }
        )

    def _write_locked(self, key: str, amount: float) -> None:
        with self._transaction() as connection:
            connection.execute(
                "INSERT INTO allowances (allowance_type, amount) VALUES (?, ?) "
                "ON CONFLICT(allowance_type) DO UPDATE SET amount = excluded.amount",
                (key, amount),
            )

    def get_config(self) -> DeductionConfig:
        with self._lock:
            return self._read_locked()

    def set_personal_deduction_default(self, amount: float) -> DeductionConfig:
        with self._lock:
            _validate_personal(self._limits, amount)
            self._write_locked(PERSONAL_KEY, amount)
            updated = self._read_locked()
        _LOGGER.info("Personal deduction default persisted as %s", amount)
        return updated

    def set_k_receipt_default(self, amount: float) -> DeductionConfig:
        with self._lock:
            _validate_k_receipt(self._limits, amount)
            self._write_locked(K_RECEIPT_KEY, amount)
            updated = self._read_locked()
        _LOGGER.info("k-receipt default persisted as %s", amount)
        return updated


def build_deduction_repository(
    initial: DeductionConfig,
) -> InMemoryDeductionRepository | SQLiteDeductionRepository:
    """Return the repository selected by ``THAITAX_DEDUCTIONS_DB``."""

    db_path = os.getenv("THAITAX_DEDUCTIONS_DB")
    if db_path and db_path.strip():
        return SQLiteDeductionRepository(os.path.expanduser(db_path.strip()), initial)
    return InMemoryDeductionRepository(initial)


__all__ = [
    "DeductionRepository",
    "InMemoryDeductionRepository",
    "SQLiteDeductionRepository",
    "build_deduction_repository",
]
