"""Scrabble Scholar API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ScholarError -> structured JSON responses
    - Services built on startup; a missing ANTHROPIC_API_KEY raises
      ConfigurationError there and startup aborts
    - In-flight registry calls and chat turns are drained (not cancelled)
      on shutdown
    - Each app instance owns one fault boundary wrapping every route
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scholar.api.dependencies import init_services
from scholar.api.error_handlers import register_error_handlers
from scholar.api.fault_boundary import FaultBoundary, install_fault_boundary
from scholar.infrastructure.observability import setup_logging
from scholar.config import Settings, get_settings
from scholar.api.routes import board, chat, definitions, health, preferences, words

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_services(app, settings)
    logger.info("Scrabble Scholar API started")
    yield
    await app.state.definition_registry.drain()
    await app.state.chat_manager.drain()
    logger.info("Scrabble Scholar API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app with middleware, handlers and routes."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Scrabble Scholar API", version="1.0.0", lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_fault_boundary(app, FaultBoundary())
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(words.router)
    app.include_router(definitions.router)
    app.include_router(board.router)
    app.include_router(chat.router)
    app.include_router(preferences.router)
    return app


app = create_app()
