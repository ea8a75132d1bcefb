# This file defines consistent API error payloads and exception handlers.
# It exists so every failure, from validation to routing to the database, returns the same envelope.
# The handlers translate domain, HTTP, and unexpected failures into safe client messages.
# Internal error text is only echoed back outside production.

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.api_config import ApiConfig
from src.api.cors import CORS_HEADERS
from src.api.response_envelope import build_error_envelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"
NOT_FOUND_MESSAGE = "Resource not found"


class APIError(Exception):
    """Domain error type with an HTTP status and structured details."""

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)


def internal_error_envelope(exc: Exception, *, config: ApiConfig) -> dict[str, Any]:
    """Build the 500 envelope, echoing the error text only when the config allows it."""

    details = str(exc) if config.include_error_details else None
    return build_error_envelope(INTERNAL_ERROR_MESSAGE, details=details)


def unhandled_error_response(request: Request, exc: Exception, *, config: ApiConfig) -> JSONResponse:
    """Log an unexpected failure and render it as a 500 envelope."""

    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=internal_error_envelope(exc, config=config),
        headers=CORS_HEADERS,
    )


def _http_error_message(status_code: int, detail: Any) -> str:
    if status_code == 405:
        return METHOD_NOT_ALLOWED_MESSAGE
    if status_code == 404:
        return NOT_FOUND_MESSAGE
    return str(detail)


def register_error_handlers(app: FastAPI, *, config_provider: Callable[[], ApiConfig]) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_envelope(exc.message, details=exc.details),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [str(error.get("msg", error)) for error in exc.errors()]
        return JSONResponse(
            status_code=400,
            content=build_error_envelope("Invalid request parameters", details=details),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        headers = {**CORS_HEADERS, **(exc.headers or {})}
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_envelope(_http_error_message(exc.status_code, exc.detail)),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return unhandled_error_response(request, exc, config=config_provider())
