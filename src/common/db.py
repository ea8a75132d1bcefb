"""
Database connection utilities.
Engines are built without an in-process pool so every unit of work opens and closes its own connection.
Transport encryption is requested through `sslmode`; `require` encrypts without validating the server certificate.
"""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool


def build_engine(database_url: str, *, sslmode: str = "require") -> Engine:
    """Create a SQLAlchemy engine for the appointments database."""

    return create_engine(
        database_url,
        poolclass=NullPool,
        connect_args={"sslmode": sslmode},
        future=True,
    )


def test_connection(engine: Engine) -> bool:
    """Return True if the database can be reached and queried."""

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
