"""FastAPI application factory / entrypoint.

This service exposes HTTP endpoints for:
- listing, retrieving, creating, updating, patching and deleting tennis players
- a welcome banner and a health check

Operational notes:
- CORS is enabled for local Vite development (see `Settings.cors_allow_origins`).
- Database connectivity is provided via `services/api/app/db.py`; the engine is
  created per application so tests can point the app at their own database.
- Run locally with `uvicorn services.api.app.main:app --reload`.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from common.logging import configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .db import build_engine, build_session_factory, init_schema
from .errors import register_exception_handlers
from .routes import router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Tennis Player REST API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""
    if app.state.settings.create_schema:
        init_schema(app.state.engine)
    logger.info("API started (db=%s)", app.state.engine.url.render_as_string(hide_password=True))
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a configured FastAPI application.

    Args:
        settings: Explicit settings; defaults to the environment-derived ones.

    Returns:
        FastAPI: The application with routes, middleware and error handlers.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
    )
    app.state.session_factory = build_session_factory(app.state.engine)

    # DEV CORS (browser fetch from Vite)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time"] = f"{elapsed_ms:.1f}ms"
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    register_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/welcome", response_class=PlainTextResponse)
    def welcome():
        """Fixed banner identifying the service."""
        return WELCOME_MESSAGE

    @app.get("/health")
    def health():
        """Health check endpoint.

        Returns a minimal payload used by local dev tooling, containers, and
        orchestrators to determine whether the API process is up.

        Returns:
            dict: `{"status": "ok", "service": "api"}`.
        """
        return {"status": "ok", "service": "api"}

    return app


app = create_app()
