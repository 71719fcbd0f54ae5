"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.errors import register_exception_handlers
from api.routes import books, users
from db import init_db
from settings import Settings, settings
from storage.file_storage import FileStorage

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure the root logger once; later calls are no-ops."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build an application with its own store and upload directory.

    The JSON document is loaded here, once per application instance, and
    handed to routes through dependencies.
    """
    cfg = app_settings or settings
    setup_logging(cfg.LOG_LEVEL)

    app = FastAPI(
        title="Book Exchange API",
        description="Peer-to-peer book exchange: users, listings and cover images",
        version="0.1.0",
    )
    app.state.settings = cfg
    app.state.store = init_db(cfg.DB_PATH)
    app.state.storage = FileStorage(cfg.UPLOADS_DIR, cfg.UPLOADS_URL)

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Stored cover images
    app.mount(
        cfg.UPLOADS_URL,
        StaticFiles(directory=str(app.state.storage.uploads_root)),
        name="uploads",
    )

    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(books.router, prefix="/api/books", tags=["books"])

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness text."""
        return "Book Exchange Backend API is running!"

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.info("Serving uploads from %s at %s", cfg.UPLOADS_DIR, cfg.UPLOADS_URL)
    return app


app = create_app()
