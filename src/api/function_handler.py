# This file is the HTTP-triggered serverless entry point for the appointments endpoint.
# The platform hands over `httpMethod`, `path`, and `body` and returns our `statusCode`/`headers`/`body` untouched.
# Dispatch mirrors the FastAPI routes and reuses the same service, envelopes, and error mapping.
# Every response, including preflight and failures, carries the CORS headers.

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Mapping
from typing import Any

from src.api.api_config import ApiConfig, get_api_config
from src.api.cors import CORS_HEADERS
from src.api.dependencies import get_appointment_service
from src.api.error_handlers import (
    INTERNAL_ERROR_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    APIError,
    internal_error_envelope,
)
from src.api.response_envelope import build_error_envelope, build_success_envelope
from src.api.services.appointment_service import (
    CREATED_MESSAGE,
    DELETED_MESSAGE,
    UPDATED_MESSAGE,
    AppointmentService,
)
from src.appointments.codes import COLLECTION_ROUTE
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)


def _response(status_code: int, payload: dict[str, Any] | None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": "" if payload is None else json.dumps(payload, default=str),
    }


def extract_appointment_id(path: str | None) -> str | None:
    """Return the path segment after the collection segment, if any."""

    segments = [segment for segment in (path or "").split("/") if segment]
    if COLLECTION_ROUTE not in segments:
        return None
    position = segments.index(COLLECTION_ROUTE)
    remainder = segments[position + 1 :]
    if len(remainder) != 1:
        return None
    return remainder[0]


def dispatch_event(
    event: Mapping[str, Any],
    *,
    service: AppointmentService,
    config: ApiConfig,
) -> dict[str, Any]:
    """Route one platform event to the matching appointment operation."""

    method = str(event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return _response(200, None)

    path = event.get("path")
    body = event.get("body")
    try:
        if event.get("isBase64Encoded") and isinstance(body, str):
            body = base64.b64decode(body)
        if method == "GET":
            return _response(200, build_success_envelope(data=service.list_appointments()))
        if method == "POST":
            created = service.create_appointment(body)
            return _response(201, build_success_envelope(data=created, message=CREATED_MESSAGE))
        if method == "PUT":
            updated = service.update_appointment(extract_appointment_id(path), body)
            return _response(200, build_success_envelope(data=updated, message=UPDATED_MESSAGE))
        if method == "DELETE":
            service.delete_appointment(extract_appointment_id(path))
            return _response(200, build_success_envelope(message=DELETED_MESSAGE))
        return _response(405, build_error_envelope(METHOD_NOT_ALLOWED_MESSAGE))
    except APIError as exc:
        return _response(exc.status_code, build_error_envelope(exc.message, details=exc.details))
    except Exception as exc:
        logger.exception("Appointments function failed on %s %s", method, path)
        return _response(500, internal_error_envelope(exc, config=config))


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Platform entry point."""

    if str(event.get("httpMethod") or "").upper() == "OPTIONS":
        return _response(200, None)

    try:
        config = get_api_config()
        configure_logging(config.log_level)
        service = get_appointment_service()
    except Exception:
        logger.exception("Appointments function could not start")
        return _response(500, build_error_envelope(INTERNAL_ERROR_MESSAGE))

    return dispatch_event(event, service=service, config=config)
