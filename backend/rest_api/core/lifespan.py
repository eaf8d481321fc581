"""
Application lifespan handler.
Builds the application context on startup and tears it down on shutdown.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rest_api.core.context import build_app_context
from rest_api.models import Base
from shared.config.logging import rest_api_logger as logger
from shared.config.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: logging, secret checks, context, tables.
    A context injected before startup (tests) is used as-is and left open.
    """
    settings = app.state.settings
    setup_logging(settings)

    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )
        logger.warning("Running with insecure defaults (acceptable for development only)")

    owns_context = getattr(app.state, "context", None) is None
    if owns_context:
        app.state.context = build_app_context(settings)
        if settings.environment != "production":
            Base.metadata.create_all(bind=app.state.context.engine)
            logger.info("Database tables created/verified")

    logger.info(
        "Starting REST API",
        port=settings.rest_api_port,
        env=settings.environment,
        session_cookie=settings.resolved_session_cookie_name,
        gate_mode=settings.session_gate_mode,
    )

    yield

    logger.info("Shutting down REST API")
    if owns_context:
        await app.state.context.close()
        app.state.context = None
