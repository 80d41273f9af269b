"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from structlog import get_logger

from ..infrastructure.config import Settings, get_settings
from ..infrastructure.logging import configure_logging
from ..infrastructure.observability import configure_logfire
from .dependencies import close_database
from .exceptions import setup_exception_handlers
from .routes import analyses, health

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Chat peaks API starting")

    yield

    await close_database()
    logger.info("Chat peaks API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Chat Peaks API",
        description="Interaction peak detection for recorded stream chat",
        version="1.0.0",
        debug=settings.debug,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    configure_logfire(settings, app)

    setup_exception_handlers(app)

    # Routes
    app.include_router(health.router, tags=["health"])
    app.include_router(
        analyses.router, prefix=f"{settings.api_prefix}/analyses", tags=["analyses"]
    )

    return app


app = create_app()
