# This module validates and normalizes appointment payloads received from clients.
# It exists so the create and update paths share one rule set and one normalization.
# Every rule is evaluated and all violations are reported together instead of stopping at the first.
# Accepted payloads are converted into a typed write record before reaching SQL.

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from src.appointments.codes import (
    DEFAULT_SORT_INDEX,
    DEFAULT_STATUS,
    PERIODS,
    SERVICE_CODES,
    STATUS_CODES,
)
from src.appointments.models import AppointmentWrite

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PLATE_REQUIRED = "Plate is required"
CAR_REQUIRED = "Car model is required"
INVALID_SERVICE = "Invalid service type"
LOCALITY_REQUIRED = "Locality is required"
INVALID_STATUS = "Invalid status"
INVALID_PERIOD = "Invalid period"
INVALID_DATE = "Invalid date, expected YYYY-MM-DD"
INVALID_SORT_INDEX = "sortIndex must be a 32-bit integer"

# Postgres INTEGER range of the sort_index column.
SORT_INDEX_MIN = -2_147_483_648
SORT_INDEX_MAX = 2_147_483_647


class MalformedPayloadError(ValueError):
    """Raised when a request body cannot be decoded into a JSON object."""


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_code(value: Any, codes: frozenset[str]) -> bool:
    return isinstance(value, str) and value in codes


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _resolved_status(payload: Mapping[str, Any]) -> Any:
    status = payload.get("status")
    return DEFAULT_STATUS if _is_blank(status) else status


def _raw_sort_index(payload: Mapping[str, Any]) -> Any:
    for key in ("sortIndex", "sort_index"):
        value = payload.get(key)
        if not _is_blank(value):
            return value
    return None


def _integer_value(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _coerce_sort_index(value: Any) -> int | None:
    if value is None:
        return DEFAULT_SORT_INDEX
    coerced = _integer_value(value)
    if coerced is None or not SORT_INDEX_MIN <= coerced <= SORT_INDEX_MAX:
        return None
    return coerced


def _parse_date(value: Any) -> date:
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise ValueError(f"Not an ISO calendar date: {value!r}")
    return date.fromisoformat(value)


def validate_appointment(payload: Mapping[str, Any]) -> list[str]:
    """Return one message per violated rule; an empty list means the payload is acceptable."""

    errors: list[str] = []

    if not _non_empty_text(payload.get("plate")):
        errors.append(PLATE_REQUIRED)

    if not _non_empty_text(payload.get("car")):
        errors.append(CAR_REQUIRED)

    if not _is_code(payload.get("service"), SERVICE_CODES):
        errors.append(INVALID_SERVICE)

    if not _non_empty_text(payload.get("locality")):
        errors.append(LOCALITY_REQUIRED)

    if not _is_code(_resolved_status(payload), STATUS_CODES):
        errors.append(INVALID_STATUS)

    period = payload.get("period")
    if not _is_blank(period) and not _is_code(period, PERIODS):
        errors.append(INVALID_PERIOD)

    raw_date = payload.get("date")
    if not _is_blank(raw_date):
        try:
            _parse_date(raw_date)
        except ValueError:
            errors.append(INVALID_DATE)

    if _coerce_sort_index(_raw_sort_index(payload)) is None:
        errors.append(INVALID_SORT_INDEX)

    return errors


def normalize_appointment(payload: Mapping[str, Any]) -> AppointmentWrite:
    """Convert a validated payload into the column-shaped write record."""

    raw_date = payload.get("date")
    period = payload.get("period")
    sort_index = _coerce_sort_index(_raw_sort_index(payload))
    if sort_index is None:
        raise ValueError("normalize_appointment called with an invalid sortIndex")

    return AppointmentWrite(
        date=None if _is_blank(raw_date) else _parse_date(raw_date),
        period=None if _is_blank(period) else str(period),
        plate=str(payload["plate"]).upper().strip(),
        car=str(payload["car"]).strip(),
        service=str(payload["service"]),
        locality=str(payload["locality"]).strip(),
        status=str(_resolved_status(payload)),
        notes=_optional_text(payload.get("notes")),
        extra=_optional_text(payload.get("extra")),
        sort_index=sort_index,
    )


def parse_appointment_payload(raw: str | bytes | Mapping[str, Any] | None) -> dict[str, Any]:
    """Decode a request body into a JSON object."""

    if isinstance(raw, Mapping):
        return dict(raw)
    if raw is None or raw == "" or raw == b"":
        raise MalformedPayloadError("Request body is empty.")

    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedPayloadError(f"Request body is not valid JSON: {exc}") from exc

    if not isinstance(decoded, dict):
        raise MalformedPayloadError("Request body must be a JSON object.")
    return decoded
