"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (expenses, health)
- Error handlers (centralized error-to-HTTP mapping)
- Middleware (request context, CORS)
- The application-wide rate limit dependency
- Logging configuration
- The expense repository and its database engine lifecycle

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from expense_api.core.config import Settings, settings
from expense_api.infrastructure.expenses import create_schema
from expense_api.interfaces.expenses.dependencies import build_expense_repository
from expense_api.interfaces.expenses.router import router as expenses_router
from expense_api.interfaces.health import router as health_router
from expense_api.shared.errors.handlers import register_error_handlers
from expense_api.shared.logging import configure_logging
from expense_api.shared.request_context import RequestContextMiddleware
from expense_api.shared.security.rate_limiting import (
    build_limiter,
    build_rate_limit,
    enforce_rate_limit,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the schema, dispose of the engine on stop."""
    engine = app.state.engine
    if engine is not None and app.state.settings.auto_create_schema:
        create_schema(engine)

    logger.info("%s %s started", app.title, app.version)
    yield

    if engine is not None:
        engine.dispose()
    logger.info("%s stopped", app.title)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to use instead of the environment-loaded ones.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level, json_output=app_settings.log_json)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
        dependencies=[Depends(enforce_rate_limit)],
    )

    repository, engine = build_expense_repository(app_settings)
    app.state.settings = app_settings
    app.state.expense_repository = repository
    app.state.engine = engine
    app.state.limiter = build_limiter(app_settings)
    app.state.rate_limit = build_rate_limit(app_settings)

    # --- Middleware (last added runs first) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(expenses_router)

    return app


app = create_app()
