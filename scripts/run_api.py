# This script serves the FastAPI app locally with uvicorn.
# Host and port come from API_HOST and API_PORT.
# ruff: noqa: E402

from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import uvicorn

from src.api.api_config import get_api_config


def main() -> int:
    config = get_api_config()
    uvicorn.run("src.api.app:app", host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
