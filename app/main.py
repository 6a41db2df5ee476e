"""Waste Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WasteLedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - EntryRuntime built on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Runtime kept on app.state: one owned store per process, reachable only
      through the get_runtime dependency
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.infrastructure.observability import setup_logging
from app.services.entry_runtime import build_runtime
from app.config import get_settings
from app.api.routes import health, waste_entries

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.runtime = await build_runtime(settings)
    logger.info("Waste Ledger API started")
    yield
    logger.info("Waste Ledger API shutting down")
    await app.state.runtime.close()


app = FastAPI(
    title="Waste Ledger API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(waste_entries.router)

register_error_handlers(app)
