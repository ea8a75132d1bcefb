# This file provides dependency factories for FastAPI routes and the function handler.
# It exists so the database client and service are created once and shared.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Centralized construction also ensures one consistent API configuration is used.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.services.appointment_service import AppointmentService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url, sslmode=config.database_sslmode)


@lru_cache(maxsize=1)
def get_appointment_service() -> AppointmentService:
    config = get_api_config()
    db_client = get_database_client()
    return AppointmentService(config=config, db=db_client)


def get_config() -> ApiConfig:
    return get_api_config()
