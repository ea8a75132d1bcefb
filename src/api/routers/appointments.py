# This file defines the appointment CRUD endpoints under the versioned API path.
# Bodies are read raw and handed to the service so malformed JSON is treated like any other infrastructure failure.
# Service calls are blocking database round trips, so they run in the threadpool.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from src.api.cors import CORS_HEADERS
from src.api.dependencies import get_appointment_service
from src.api.response_envelope import build_success_envelope
from src.api.schemas.appointment_schemas import AppointmentListResponseV1, AppointmentResponseV1
from src.api.schemas.common import ErrorResponse, MessageResponse
from src.api.services.appointment_service import (
    CREATED_MESSAGE,
    DELETED_MESSAGE,
    UPDATED_MESSAGE,
    AppointmentService,
)
from src.appointments.codes import COLLECTION_ROUTE

router = APIRouter(prefix=f"/{COLLECTION_ROUTE}", tags=["appointments"])
AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _json(status_code: int, content: dict[str, object]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


@router.get("", response_model=AppointmentListResponseV1, responses=_ERROR_RESPONSES)
async def list_appointments(service: AppointmentServiceDep) -> JSONResponse:
    appointments = await run_in_threadpool(service.list_appointments)
    return _json(200, build_success_envelope(data=appointments))


@router.post(
    "",
    status_code=201,
    response_model=AppointmentResponseV1,
    responses=_ERROR_RESPONSES,
)
async def create_appointment(request: Request, service: AppointmentServiceDep) -> JSONResponse:
    body = await request.body()
    created = await run_in_threadpool(service.create_appointment, body)
    return _json(201, build_success_envelope(data=created, message=CREATED_MESSAGE))


@router.put("", response_model=AppointmentResponseV1, responses=_ERROR_RESPONSES)
async def update_without_id(request: Request, service: AppointmentServiceDep) -> JSONResponse:
    return await update_appointment("", request, service)


@router.put("/{appointment_id}", response_model=AppointmentResponseV1, responses=_ERROR_RESPONSES)
async def update_appointment(
    appointment_id: str,
    request: Request,
    service: AppointmentServiceDep,
) -> JSONResponse:
    body = await request.body()
    updated = await run_in_threadpool(service.update_appointment, appointment_id, body)
    return _json(200, build_success_envelope(data=updated, message=UPDATED_MESSAGE))


@router.delete("", response_model=MessageResponse, responses=_ERROR_RESPONSES)
async def delete_without_id(service: AppointmentServiceDep) -> JSONResponse:
    return await delete_appointment("", service)


@router.delete("/{appointment_id}", response_model=MessageResponse, responses=_ERROR_RESPONSES)
async def delete_appointment(appointment_id: str, service: AppointmentServiceDep) -> JSONResponse:
    await run_in_threadpool(service.delete_appointment, appointment_id)
    return _json(200, build_success_envelope(message=DELETED_MESSAGE))
