# This file holds the CORS headers attached to every response.
# Both the FastAPI app and the function handler import the same mapping so browsers see identical headers.

from __future__ import annotations

from typing import Final

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}
