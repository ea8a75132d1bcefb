# This file holds the SQL statements behind every appointment operation.
# It exists so the service layer never builds SQL and each operation stays a single parameterized statement.
# The repository is bound to one open connection; acquiring and releasing it is the caller's job.

from __future__ import annotations

import re
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection

from src.appointments.codes import PERIOD_ORDER
from src.appointments.models import AppointmentWrite

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_MUTABLE_COLUMNS: tuple[str, ...] = (
    "date",
    "period",
    "plate",
    "car",
    "service",
    "locality",
    "status",
    "notes",
    "extra",
    "sort_index",
)


def _period_rank_sql() -> str:
    branches = " ".join(
        f"WHEN '{period}' THEN {rank}" for rank, period in enumerate(PERIOD_ORDER)
    )
    return f"CASE period {branches} ELSE {len(PERIOD_ORDER)} END"


class AppointmentRepository:
    """Single-statement SQL access to the appointments table."""

    def __init__(self, connection: Connection, *, table_name: str = "appointments") -> None:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        self._connection = connection
        self._table = table_name

    def list_all(self) -> list[dict[str, Any]]:
        query = f"""
        SELECT *
        FROM {self._table}
        ORDER BY
            CASE WHEN date IS NULL THEN 1 ELSE 0 END,
            date ASC,
            {_period_rank_sql()} ASC,
            sort_index ASC
        """
        rows = self._connection.execute(text(query)).mappings().all()
        return [dict(row) for row in rows]

    def insert(self, write: AppointmentWrite) -> dict[str, Any]:
        columns = ", ".join(_MUTABLE_COLUMNS)
        values = ", ".join(f":{column}" for column in _MUTABLE_COLUMNS)
        query = f"""
        INSERT INTO {self._table} ({columns})
        VALUES ({values})
        RETURNING *
        """
        row = self._connection.execute(text(query), write.as_params()).mappings().one()
        return dict(row)

    def update(self, appointment_id: str, write: AppointmentWrite) -> dict[str, Any] | None:
        assignments = ",\n            ".join(f"{column} = :{column}" for column in _MUTABLE_COLUMNS)
        query = f"""
        UPDATE {self._table}
        SET {assignments},
            updated_at = CURRENT_TIMESTAMP
        WHERE id = CAST(:appointment_id AS UUID)
        RETURNING *
        """
        params = {**write.as_params(), "appointment_id": appointment_id}
        row = self._connection.execute(text(query), params).mappings().first()
        return dict(row) if row is not None else None

    def delete(self, appointment_id: str) -> bool:
        query = f"""
        DELETE FROM {self._table}
        WHERE id = CAST(:appointment_id AS UUID)
        RETURNING id
        """
        row = self._connection.execute(text(query), {"appointment_id": appointment_id}).first()
        return row is not None
