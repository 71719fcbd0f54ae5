"""Run the API with uvicorn.

Usage (from backend/):
    python -m scripts.serve [--host 0.0.0.0] [--port 3001] [--reload]

Defaults come from HOST, PORT and BOOKSWAP_RELOAD, read after backend/.env
is loaded.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import uvicorn
from dotenv import load_dotenv

from settings import Settings

logger = logging.getLogger("serve")

ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


def main(argv: Optional[Sequence[str]] = None, env_path: Path = ENV_PATH) -> int:
    load_dotenv(env_path)
    settings = Settings()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(message)s")
    parser = argparse.ArgumentParser(description="Serve the book exchange API.")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true", default=settings.RELOAD)
    args = parser.parse_args(argv)

    logger.info("Server is running on port %s", args.port)
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
