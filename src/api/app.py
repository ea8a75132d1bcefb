# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app answers CORS preflight itself, stamps CORS headers and request IDs on every response, and records metrics.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint
from starlette.routing import Match
from starlette.types import Scope

from src.api.api_config import ApiConfig, get_api_config
from src.api.cors import CORS_HEADERS
from src.api.dependencies import get_config
from src.api.error_handlers import register_error_handlers, unhandled_error_response
from src.api.routers.appointments import router as appointments_router
from src.api.routers.health import router as health_router
from src.common.logging import configure_logging

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)

UNMATCHED_PATH_LABEL = "unmatched"


def route_path_label(app: FastAPI, scope: Scope) -> str:
    """Return the route template for a request so metric labels stay bounded."""

    partial: str | None = None
    for route in app.router.routes:
        match, _ = route.matches(scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_PATH_LABEL)
        if match == Match.PARTIAL and partial is None:
            partial = getattr(route, "path", UNMATCHED_PATH_LABEL)
    return partial or UNMATCHED_PATH_LABEL


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    config = get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description="CRUD API for vehicle-service appointments backed by a single PostgreSQL table.",
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "appointments", "description": "Create, list, update, and delete appointments."},
        ],
    )

    def resolve_config() -> ApiConfig:
        provider = app.dependency_overrides.get(get_config, get_config)
        return provider()

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = route_path_label(app, request.scope)
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            if request.method == "OPTIONS":
                response = Response(status_code=200, content=b"")
            else:
                try:
                    response = await call_next(request)
                except Exception as exc:
                    response = unhandled_error_response(request, exc, config=resolve_config())
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers.update(CORS_HEADERS)
            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app, config_provider=resolve_config)

    app.include_router(health_router)
    app.include_router(appointments_router, prefix=config.api_version_path)

    return app


app = create_app()
