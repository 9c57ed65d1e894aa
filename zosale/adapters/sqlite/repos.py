import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from zosale.components.services import StoreUnavailableError
from zosale.domain.entities import ServiceRecord


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _row_to_record(row: dict[str, Any]) -> ServiceRecord:
    return ServiceRecord(
        id=row["id"],
        ref_no=row["ref_no"],
        employee=row["employee"],
        type=row["type"],
        package_name=row["package_name"],
        ser_number=row["ser_number"],
        vendor=row["vendor"],
        status=row["status"],
        expires=row["expires"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class SQLiteServiceRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; store outages surface as StoreUnavailableError."""
        try:
            conn = self._get_conn()
        except sqlite3.OperationalError as e:
            raise StoreUnavailableError(str(e)) from e
        try:
            yield conn
        except sqlite3.OperationalError as e:
            conn.rollback()
            raise StoreUnavailableError(str(e)) from e
        finally:
            conn.close()

    def save(self, record: ServiceRecord) -> ServiceRecord:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO service_records (
                    id, ref_no, employee, type, package_name, ser_number,
                    vendor, status, expires, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    ref_no=excluded.ref_no,
                    employee=excluded.employee,
                    type=excluded.type,
                    package_name=excluded.package_name,
                    ser_number=excluded.ser_number,
                    vendor=excluded.vendor,
                    status=excluded.status,
                    expires=excluded.expires,
                    updated_at=excluded.updated_at
            """,
                (
                    record.id,
                    record.ref_no,
                    record.employee,
                    record.type,
                    record.package_name,
                    record.ser_number,
                    record.vendor,
                    record.status,
                    record.expires,
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return record

    def get_by_id(self, service_id: str) -> ServiceRecord | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM service_records WHERE id = ?", (service_id,)
            ).fetchone()
            return _row_to_record(row) if row else None

    def get_all(self) -> list[ServiceRecord]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM service_records ORDER BY rowid ASC").fetchall()
            return [_row_to_record(row) for row in rows]

    def delete(self, service_id: str) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM service_records WHERE id = ?", (service_id,))
            conn.commit()
