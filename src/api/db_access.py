# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep engine setup and connection scoping out of router and service code.
# Each request borrows exactly one connection inside one transaction and always hands it back.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from src.common.db import build_engine

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for request-scoped connections."""

    def __init__(self, *, database_url: str, sslmode: str = "require") -> None:
        self._engine: Engine = build_engine(database_url, sslmode=sslmode)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Yield a connection inside a transaction; commit on success, roll back on error."""

        with self._engine.begin() as connection:
            yield connection

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        self._validate_identifier(table_name)
        query = text("SELECT to_regclass(:table_name) IS NOT NULL AS exists_flag")
        with self._engine.connect() as connection:
            result = connection.execute(query, {"table_name": table_name}).scalar_one()
        return bool(result)

    def _validate_identifier(self, identifier: str) -> str:
        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier
