"""Lexicology API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Store constructed and schema initialized in the lifespan; kept on app.state.store
    - A schema that cannot be initialized aborts startup
    - CORS configured from settings (not hardcoded)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lexicology.api.error_handlers import register_error_handlers
from lexicology.api.routes import health, users, words
from lexicology.config import get_settings
from lexicology.infrastructure.database import Store
from lexicology.infrastructure.observability import setup_logging
from lexicology.infrastructure.schema import SchemaManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = Store(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    await SchemaManager(store).initialize()
    app.state.store = store
    logger.info("Lexicology API started")
    yield
    logger.info("Lexicology API shutting down")
    await store.dispose()


app = FastAPI(
    title="Lexicology API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(words.router)

register_error_handlers(app)
