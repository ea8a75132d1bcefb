"""
Typed appointment records.
`AppointmentWrite` is the column-shaped record produced after validation; `appointment_from_row`
maps a storage row back to the camelCase entity returned to clients.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class AppointmentWrite:
    """Normalized values for every mutable column of an appointment row."""

    date: date | None
    period: str | None
    plate: str
    car: str
    service: str
    locality: str
    status: str
    notes: str | None
    extra: str | None
    sort_index: int

    def as_params(self) -> dict[str, Any]:
        return asdict(self)


def _iso_date(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def _iso_timestamp(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def appointment_from_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map one `appointments` row to the entity JSON shape."""

    return {
        "id": str(row["id"]),
        "date": _iso_date(row.get("date")),
        "period": row.get("period"),
        "plate": row["plate"],
        "car": row["car"],
        "service": row["service"],
        "locality": row["locality"],
        "status": row["status"],
        "notes": row.get("notes"),
        "extra": row.get("extra"),
        "sortIndex": row.get("sort_index"),
        "createdAt": _iso_timestamp(row.get("created_at")),
        "updatedAt": _iso_timestamp(row.get("updated_at")),
    }
