"""MockAPI — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, health before the catch-all
    - Global error handlers map MockApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One shared httpx.AsyncClient per process, opened and closed by the lifespan

Design Decisions:
    - Lifespan owns the outbound client; nothing network-bound at import time
    - Resolver, fetcher and scheduler live on app.state: no import-time globals,
      routes reach them through a dependency
    - Pending notifications are not awaited on shutdown: they are detached by contract
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mockapi.api.error_handlers import register_error_handlers
from mockapi.api.routes import health, mock_api
from mockapi.config import get_settings
from mockapi.infrastructure.observability import setup_logging
from mockapi.infrastructure.raw_file_client import RawFileFetcher
from mockapi.services.notification_scheduler import NotificationScheduler
from mockapi.services.resolve_request import MockRequestResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    client = httpx.AsyncClient(
        timeout=settings.fetch_timeout_seconds, follow_redirects=True,
    )
    scheduler = NotificationScheduler(client)
    app.state.resolver = MockRequestResolver(
        settings, RawFileFetcher(client), scheduler,
    )
    logger.info("MockAPI started")
    yield
    if scheduler.pending:
        logger.warning(
            f"Shutting down with {len(scheduler.pending)} pending notification(s)",
        )
    await client.aclose()
    logger.info("MockAPI shutting down")


app = FastAPI(
    title="MockAPI", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration; health first so the catch-all never shadows it
app.include_router(health.router)
app.include_router(mock_api.router)

register_error_handlers(app)
