# This file builds response envelopes for API endpoints in a consistent format.
# It exists so every response, successful or not, carries the same `success`/`data`/`error` shape.
# The helpers return plain dictionaries and leave out keys that have no value.
# This keeps endpoint functions focused on data retrieval instead of repetitive envelope assembly.

from __future__ import annotations

from typing import Any

_UNSET: Any = object()


def build_success_envelope(
    *,
    data: Any = _UNSET,
    message: str | None = None,
) -> dict[str, Any]:
    """Build a success envelope; `data` is omitted when not given."""

    payload: dict[str, Any] = {"success": True}
    if data is not _UNSET:
        payload["data"] = data
    if message is not None:
        payload["message"] = message
    return payload


def build_error_envelope(error: str, *, details: Any | None = None) -> dict[str, Any]:
    """Build an error envelope; `details` is omitted when empty."""

    payload: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        payload["details"] = details
    return payload
