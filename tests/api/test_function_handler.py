# This file tests the serverless function entry point.
# It exists to confirm the platform event contract: method, path, and body in; status, headers, and body out.

from __future__ import annotations

import base64
import json

import pytest

from src.api import function_handler
from src.api.cors import CORS_HEADERS
from tests.api.support import FakeDBClient, build_test_config, build_test_service, valid_payload


def _event(method: str, path: str = "/.netlify/functions/appointments", body: object = None) -> dict[str, object]:
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {"httpMethod": method, "path": path, "body": body}


def _dispatch(service, event: dict[str, object], *, environment: str = "test") -> tuple[int, dict]:
    response = function_handler.dispatch_event(
        event, service=service, config=build_test_config(environment=environment)
    )
    assert response["headers"] == CORS_HEADERS
    return response["statusCode"], json.loads(response["body"]) if response["body"] else {}


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/.netlify/functions/appointments/abc-123", "abc-123"),
        ("/api/appointments/abc-123/", "abc-123"),
        ("/.netlify/functions/appointments", None),
        ("/.netlify/functions/appointments/a/b", None),
        ("/somewhere/else", None),
        (None, None),
    ],
)
def test_extract_appointment_id(path: str | None, expected: str | None) -> None:
    assert function_handler.extract_appointment_id(path) == expected


def test_options_needs_no_configuration_or_database(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    response = function_handler.handler({"httpMethod": "OPTIONS", "path": "/whatever"})

    assert response == {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}


def test_crud_lifecycle_through_events(appointment_store) -> None:
    service, db = build_test_service(store=appointment_store)

    status, created = _dispatch(service, _event("POST", body=valid_payload()))
    assert status == 201
    appointment_id = created["data"]["id"]

    status, listed = _dispatch(service, _event("GET"))
    assert status == 200
    assert listed == {"success": True, "data": [created["data"]]}

    status, updated = _dispatch(
        service,
        _event("PUT", f"/.netlify/functions/appointments/{appointment_id}", valid_payload(period="Afternoon")),
    )
    assert status == 200
    assert updated["data"]["period"] == "Afternoon"

    status, deleted = _dispatch(service, _event("DELETE", f"/.netlify/functions/appointments/{appointment_id}"))
    assert status == 200
    assert deleted == {"success": True, "message": "Appointment deleted successfully"}
    assert db.opened == db.released == 4


def test_validation_failure_returns_400(appointment_store) -> None:
    service, _ = build_test_service(store=appointment_store)

    status, body = _dispatch(service, _event("POST", body={"service": "XX"}))

    assert status == 400
    assert body["error"] == "Invalid data"
    assert len(body["details"]) == 4


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
def test_missing_id_returns_400(appointment_store, method: str) -> None:
    service, _ = build_test_service(store=appointment_store)

    status, body = _dispatch(service, _event(method, body=valid_payload()))

    assert status == 400
    assert body == {"success": False, "error": "Appointment id is required"}


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
def test_unknown_id_returns_404(appointment_store, method: str) -> None:
    service, _ = build_test_service(store=appointment_store)

    status, body = _dispatch(service, _event(method, "/appointments/nope", valid_payload()))

    assert status == 404
    assert body == {"success": False, "error": "Appointment not found"}


def test_unsupported_method_returns_405(appointment_store) -> None:
    service, db = build_test_service(store=appointment_store)

    status, body = _dispatch(service, _event("PATCH", body=valid_payload()))

    assert status == 405
    assert body == {"success": False, "error": "Method not allowed"}
    assert db.opened == 0


def test_malformed_body_is_an_internal_error(appointment_store) -> None:
    service, _ = build_test_service(store=appointment_store)

    status, body = _dispatch(service, _event("POST", body="{not json"))
    assert status == 500
    assert body["error"] == "Internal server error"
    assert "details" in body

    status, body = _dispatch(service, _event("POST", body="{not json"), environment="production")
    assert status == 500
    assert body == {"success": False, "error": "Internal server error"}


def test_database_failure_releases_connection() -> None:
    db = FakeDBClient(fail_with=ConnectionError("connection refused"))
    service, _ = build_test_service(db_client=db)

    status, body = _dispatch(service, _event("GET"))

    assert status == 500
    assert body["details"] == "connection refused"
    assert db.opened == db.released == 1


def test_handler_uses_configured_service(monkeypatch: pytest.MonkeyPatch, appointment_store) -> None:
    service, _ = build_test_service(store=appointment_store)
    monkeypatch.setattr(function_handler, "get_appointment_service", lambda: service)

    response = function_handler.handler(_event("GET"), None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"success": True, "data": []}


def test_base64_encoded_body_is_decoded(appointment_store) -> None:
    service, _ = build_test_service(store=appointment_store)
    encoded = base64.b64encode(json.dumps(valid_payload()).encode("utf-8")).decode("ascii")
    event = {**_event("POST"), "body": encoded, "isBase64Encoded": True}

    status, body = _dispatch(service, event)

    assert status == 201
    assert body["data"]["plate"] == "AA-12-BB"
