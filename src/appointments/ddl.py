"""DDL helpers for the appointments table."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

DEFAULT_DDL_DIR = Path(__file__).resolve().parents[2] / "sql" / "ddl"

DDL_ORDER = [
    "appointments.sql",
]


def apply_appointments_ddl(engine: Engine, ddl_dir: Path | None = None) -> None:
    """Apply appointment DDL files in deterministic order."""

    ddl_path = ddl_dir or DEFAULT_DDL_DIR
    with engine.begin() as connection:
        for ddl_file in DDL_ORDER:
            sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
            connection.exec_driver_sql(sql_text)
