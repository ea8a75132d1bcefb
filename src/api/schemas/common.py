# This file defines shared envelope models reused by every API endpoint.
# It exists so success and error payloads keep one shape across routes and the function handler.
# These classes are also used by tests to validate response shape stability.

from __future__ import annotations

from pydantic import BaseModel


class EnvelopeFields(BaseModel):
    success: bool
    message: str | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: list[str] | str | None = None


class MessageResponse(EnvelopeFields):
    pass
