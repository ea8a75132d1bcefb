# This file implements the appointment CRUD operations shared by the FastAPI routes and the function handler.
# It exists so transports stay thin while validation, SQL, and row shaping live in one layer.
# Every operation decodes and validates first and only then borrows one connection for one statement.
# Updates are full replacements and the last writer wins; there is no version check.

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import APIError
from src.appointments.models import AppointmentWrite, appointment_from_row
from src.appointments.repository import AppointmentRepository
from src.appointments.validation import (
    normalize_appointment,
    parse_appointment_payload,
    validate_appointment,
)

logger = logging.getLogger(__name__)

INVALID_DATA_MESSAGE = "Invalid data"
ID_REQUIRED_MESSAGE = "Appointment id is required"
NOT_FOUND_MESSAGE = "Appointment not found"
CREATED_MESSAGE = "Appointment created successfully"
UPDATED_MESSAGE = "Appointment updated successfully"
DELETED_MESSAGE = "Appointment deleted successfully"

RequestBody = str | bytes | Mapping[str, Any] | None


class AppointmentService:
    """Validation, persistence, and row shaping for appointments."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.table_name = self.config.appointments_table_name

    def list_appointments(self) -> list[dict[str, Any]]:
        with self.db.connection() as connection:
            rows = AppointmentRepository(connection, table_name=self.table_name).list_all()
        return [appointment_from_row(row) for row in rows]

    def create_appointment(self, body: RequestBody) -> dict[str, Any]:
        write = self._validated_write(body)
        with self.db.connection() as connection:
            row = AppointmentRepository(connection, table_name=self.table_name).insert(write)
        created = appointment_from_row(row)
        logger.info("Created appointment %s for plate %s", created["id"], created["plate"])
        return created

    def update_appointment(self, appointment_id: str | None, body: RequestBody) -> dict[str, Any]:
        resolved_id = self._require_id(appointment_id)
        write = self._validated_write(body)
        with self.db.connection() as connection:
            row = AppointmentRepository(connection, table_name=self.table_name).update(
                resolved_id, write
            )
        if row is None:
            raise APIError(status_code=404, message=NOT_FOUND_MESSAGE)
        logger.info("Updated appointment %s", resolved_id)
        return appointment_from_row(row)

    def delete_appointment(self, appointment_id: str | None) -> None:
        resolved_id = self._require_id(appointment_id)
        with self.db.connection() as connection:
            deleted = AppointmentRepository(connection, table_name=self.table_name).delete(resolved_id)
        if not deleted:
            raise APIError(status_code=404, message=NOT_FOUND_MESSAGE)
        logger.info("Deleted appointment %s", resolved_id)

    def _validated_write(self, body: RequestBody) -> AppointmentWrite:
        payload = parse_appointment_payload(body)
        errors = validate_appointment(payload)
        if errors:
            raise APIError(status_code=400, message=INVALID_DATA_MESSAGE, details=errors)
        return normalize_appointment(payload)

    @staticmethod
    def _require_id(appointment_id: str | None) -> str:
        """Return the canonical UUID text of a path id; ids that are not UUIDs match no row."""

        cleaned = (appointment_id or "").strip()
        if not cleaned:
            raise APIError(status_code=400, message=ID_REQUIRED_MESSAGE)
        try:
            return str(uuid.UUID(cleaned))
        except ValueError as exc:
            raise APIError(status_code=404, message=NOT_FOUND_MESSAGE) from exc
