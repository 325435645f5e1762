"""Portfolio API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as {ok: false, error, code}
    - Rate limiter created with the app and reached only via dependency
    - Database initialized on startup via lifespan context manager
    - No trailing-slash redirects: a redirect would reveal that an admin path exists

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.middleware import register_middleware
from app.api.routes import (
    admin_pricing, admin_reviews, admin_session, games_data, health,
    public_content,
)
from app.config import get_settings
import app.infrastructure.database as database
from app.infrastructure.observability import setup_logging
from app.infrastructure.rate_limiter import InMemoryRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Portfolio API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Portfolio API shutting down")


app = FastAPI(
    title="Portfolio API", version="1.0.0", lifespan=lifespan,
    redirect_slashes=False,
)

settings = get_settings()
app.state.rate_limiter = InMemoryRateLimiter(
    limit=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds,
)

register_middleware(app)
register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(games_data.router)
app.include_router(public_content.router)
app.include_router(admin_session.router)
app.include_router(admin_pricing.router)
app.include_router(admin_reviews.router)
