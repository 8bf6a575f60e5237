"""Rank Card API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RankCardError → {"error": message} JSON responses
    - No CORS middleware: preflight OPTIONS reaches the method gate like any other verb
    - Screenshot client created on startup and closed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rankcard import __version__
from rankcard.api.error_handlers import register_error_handlers
from rankcard.api.routes import health, rank_card
from rankcard.config import get_settings
from rankcard.infrastructure.observability import setup_logging
from rankcard.infrastructure.screenshot_client import close_renderer, init_renderer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_renderer(settings)
    logger.info(f"Rank card API started, rendering via {settings.render_service_url}")
    yield
    await close_renderer()
    logger.info("Rank card API shutting down")


app = FastAPI(
    title="Rank Card API", version=__version__, lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(rank_card.router)

register_error_handlers(app)
