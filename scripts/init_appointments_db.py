# This script creates the appointments table if it does not exist yet.
# It reads DATABASE_URL and DATABASE_SSLMODE from `.env` or the process environment.
# ruff: noqa: E402

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.appointments.ddl import DEFAULT_DDL_DIR, apply_appointments_ddl
from src.common.db import build_engine, test_connection
from src.common.logging import configure_logging
from src.common.settings import get_settings

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the appointments table.")
    parser.add_argument(
        "--ddl-dir",
        type=Path,
        default=DEFAULT_DDL_DIR,
        help="Directory holding the DDL files.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    configure_logging()
    settings = get_settings()
    engine = build_engine(settings.DATABASE_URL, sslmode=settings.DATABASE_SSLMODE)

    if not test_connection(engine):
        logger.error("Database is unreachable; check DATABASE_URL.")
        return 1

    apply_appointments_ddl(engine, ddl_dir=args.ddl_dir)
    logger.info("Appointments table is ready.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
