"""Contribution Metrics API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MetricsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module a
      wiring-only file
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metrics_api.api.error_handlers import register_error_handlers
from metrics_api.api.routes import github_contributors, github_organizations, health, users
from metrics_api.config import get_settings
from metrics_api.infrastructure.database import close_db, init_db
from metrics_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"{settings.service_name} {settings.service_version} started",
        extra={"service": settings.service_name},
    )
    yield
    await close_db()
    logger.info("Contribution Metrics API shutting down")


settings = get_settings()

app = FastAPI(
    title="Contribution Metrics API",
    version=settings.service_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(github_organizations.router)
app.include_router(users.router)
app.include_router(github_contributors.router)

register_error_handlers(app)
