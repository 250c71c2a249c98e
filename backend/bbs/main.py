"""BBS API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BoardError → {"error": ...} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database engines created on startup and disposed on shutdown via lifespan
    - Static front end mounted AFTER API routes so /api/* and /healthz win
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bbs.api.error_handlers import register_error_handlers
from bbs.api.routes import diagnostics, health, posts
from bbs.config import get_settings
from bbs.infrastructure.database import close_db, init_db
from bbs.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        settings.database_service_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.service_enabled:
        logger.info("Service role not configured; admin writes disabled")
    logger.info("BBS API started")
    yield
    await close_db()
    logger.info("BBS API shutting down")


app = FastAPI(title="BBS API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(posts.router)
app.include_router(diagnostics.router)

register_error_handlers(app)

if STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")


def run() -> None:
    """Local dev server."""
    settings = get_settings()
    uvicorn.run("bbs.main:app", host=settings.host, port=settings.port)
