"""Foodlist API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FoodlistError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema creation and sample data are opt-in settings; production schemas come
      from alembic migrations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foodlist.api.error_handlers import register_error_handlers
from foodlist.api.routes import health, households, items, shopping_lists, users
from foodlist.config import get_settings
from foodlist.infrastructure.database import init_db
from foodlist.infrastructure.observability import setup_logging
from foodlist.services.seed_sample_data import seed_sample_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    if settings.seed_sample_data:
        async with manager.session() as db:
            await seed_sample_data(db, settings.sample_data_password)
    logger.info("Foodlist API started")
    yield
    logger.info("Foodlist API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Foodlist API", version=get_settings().service_version, lifespan=lifespan,
)

# CORS: origins from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(households.router)
app.include_router(users.router)
app.include_router(shopping_lists.router)
app.include_router(items.router)

register_error_handlers(app)
