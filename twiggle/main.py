"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (diagnostics, actuator, grouped docs)
- Error handlers (centralized fault-to-HTTP mapping)
- Rate limiter registry
- Logging configuration

No business logic belongs here. Run with ``uvicorn twiggle.main:app``.
"""

import logging

from fastapi import FastAPI

from twiggle.core.config import settings
from twiggle.interfaces.actuator import router as actuator_router
from twiggle.interfaces.diagnostics import router as diagnostics_router
from twiggle.interfaces.docs import router as docs_router
from twiggle.shared.errors.handlers import register_error_handlers
from twiggle.shared.logging import configure_logging
from twiggle.shared.security.rate_limiting import rate_limiters

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and the rate limiter registry.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # --- Rate Limiting ---
    app.state.limiter = rate_limiters.limiter
    app.state.rate_limiters = rate_limiters

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(diagnostics_router, prefix="/api")
    app.include_router(actuator_router)
    app.include_router(docs_router)

    logger.info(
        "%s %s ready with rate limiter policies: %s",
        settings.project_name,
        settings.version,
        ", ".join(p.name for p in rate_limiters.policies),
    )
    return app


app = create_app()
