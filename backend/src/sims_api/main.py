"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sims_api import __version__
from sims_api.config import Settings, get_settings
from sims_api.database import Database
from sims_api.dependencies import require_configuration
from sims_api.exceptions import LoginRateLimitedError, SimsAPIError
from sims_api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    login_rate_limited_handler,
    sims_api_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from sims_api.middleware.path_prefix_middleware import PathPrefixMiddleware
from sims_api.middleware.request_id_middleware import RequestIDMiddleware
from sims_api.middleware.security_headers_middleware import SecurityHeadersMiddleware
from sims_api.routers import analytics, auth, evaluations
from sims_api.security.rate_limit import build_limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    missing = app.state.settings.missing_required
    if missing:
        logger.warning(f"Missing configuration, API requests will fail: {', '.join(missing)}")
    yield
    if app.state.database is not None:
        await app.state.database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        database: Database to use instead of one built from settings

    Returns:
        Configured application
    """
    config = settings or get_settings()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="HR weekly evaluation and risk API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Explicitly constructed dependencies, handed out via sims_api.dependencies
    app.state.settings = config
    app.state.database = database if database is not None else Database.from_settings(config)

    # Login rate limiting, counters scoped to this application
    app.state.limiter = build_limiter(config)
    app.add_exception_handler(LoginRateLimitedError, login_rate_limited_handler)

    app.add_exception_handler(SimsAPIError, sims_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = config.cors_origins_list
    if not allowed_origins:
        logger.warning("FRONTEND_URL is not set; cross-origin requests will be rejected")

    # Middleware runs in reverse order of addition: the last one added sees
    # the request first.
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=not config.debug)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    if config.path_prefix:
        app.add_middleware(PathPrefixMiddleware, prefix=config.path_prefix)

    guarded = [Depends(require_configuration)]
    app.include_router(auth.router, prefix="/api", tags=["Authentication"], dependencies=guarded)
    app.include_router(
        evaluations.router, prefix="/api/evaluations", tags=["Evaluations"], dependencies=guarded
    )
    app.include_router(
        analytics.router, prefix="/api/analytics", tags=["Analytics"], dependencies=guarded
    )

    @app.get("/api/health")
    async def health_check() -> dict[str, bool]:
        """Liveness check."""
        return {"ok": True}

    return app


app = create_app()
