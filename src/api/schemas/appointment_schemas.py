# This file defines appointment endpoint schemas for entities and their envelopes.
# Field names use the client-facing camelCase convention; storage columns are snake_case.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from src.api.schemas.common import EnvelopeFields


class AppointmentV1(BaseModel):
    id: str
    date: str | None = None
    period: str | None = None
    plate: str
    car: str
    service: str
    locality: str
    status: str
    notes: str | None = None
    extra: str | None = None
    sortIndex: int
    createdAt: datetime | None = None
    updatedAt: datetime | None = None


class AppointmentListResponseV1(EnvelopeFields):
    data: list[AppointmentV1]


class AppointmentResponseV1(EnvelopeFields):
    data: AppointmentV1
