"""Bill store using SQLite."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from ...domain.errors import PipelineError
from ...domain.models import BillRecord
from ...ports.store import BillStorePort, StoredBill

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS bills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    file_path TEXT NOT NULL,
    file_hash TEXT NOT NULL UNIQUE,
    document_type TEXT NOT NULL,
    month TEXT NOT NULL,
    year INTEGER NOT NULL,
    period TEXT NOT NULL,
    is_offered_period INTEGER NOT NULL,
    total_units INTEGER NOT NULL,
    base_price TEXT NOT NULL,
    discount_value TEXT NOT NULL,
    price_after_discount TEXT NOT NULL,
    energy_value TEXT NOT NULL,
    taxes_and_fees TEXT NOT NULL,
    total_amount TEXT NOT NULL,
    processed_at TEXT NOT NULL,
    serialized TEXT NOT NULL
)
"""


def _from_row(row: sqlite3.Row) -> StoredBill:
    return StoredBill(
        id=row["id"],
        file_path=row["file_path"],
        file_hash=row["file_hash"],
        month=row["month"],
        year=row["year"],
        period=row["period"],
        is_offered_period=bool(row["is_offered_period"]),
        total_units=row["total_units"],
        base_price=Decimal(row["base_price"]),
        discount_value=Decimal(row["discount_value"]),
        price_after_discount=Decimal(row["price_after_discount"]),
        energy_value=Decimal(row["energy_value"]),
        taxes_and_fees=Decimal(row["taxes_and_fees"]),
        total_amount=Decimal(row["total_amount"]),
        processed_at=row["processed_at"],
        serialized=row["serialized"],
    )


class SqliteBillStore(BillStorePort):
    """Store implementation using a local SQLite file.

    Every call commits its own transaction, so a save is visible to the
    next exists() immediately.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._transaction() as conn:
            conn.execute(SCHEMA)

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise PipelineError.persistence(f"Cannot open database: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PipelineError.persistence(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def exists(self, fingerprint: str) -> bool:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT 1 FROM bills WHERE file_hash = ?", (fingerprint,)
            ).fetchone()
            return row is not None

    def save(self, record: BillRecord, fingerprint: str, serialized: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        consumption = record.consumption
        financial = record.financial

        try:
            with self._transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO bills (
                        file_path, file_hash, document_type, month, year, period,
                        is_offered_period, total_units, base_price, discount_value,
                        price_after_discount, energy_value, taxes_and_fees,
                        total_amount, processed_at, serialized
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(record.source_path),
                        fingerprint,
                        record.document_type,
                        record.month,
                        record.year,
                        record.period,
                        int(record.is_offered_period),
                        consumption.total_units,
                        str(consumption.base_price),
                        str(consumption.discount_value),
                        str(consumption.price_after_discount),
                        str(financial.energy_value),
                        str(financial.taxes_and_fees),
                        str(financial.total_amount),
                        now,
                        serialized,
                    ),
                )
        except PipelineError as e:
            raise PipelineError.persistence(f"Failed to save bill: {e.message}") from e

        logger.debug(f"Saved bill {record.month}/{record.year} ({fingerprint[:16]})")

    def get_bills_by_year(self, year: int) -> list[StoredBill]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM bills WHERE year = ? ORDER BY id", (year,)
            ).fetchall()
            return [_from_row(row) for row in rows]

    def get_all_bills(self) -> list[StoredBill]:
        with self._transaction() as conn:
            rows = conn.execute("SELECT * FROM bills ORDER BY year DESC, id").fetchall()
            return [_from_row(row) for row in rows]

    def get_total_count(self) -> int:
        with self._transaction() as conn:
            return conn.execute("SELECT COUNT(*) FROM bills").fetchone()[0]
