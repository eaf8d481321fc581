"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from typing import Optional

from fastapi import FastAPI

from rest_api.core.context import AppContext
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.imports import router as imports_router
from rest_api.routers.profile import router as profile_router
from rest_api.routers.tenant import router as tenant_router
from shared.config.settings import Settings, get_settings


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    ``context`` is normally built by the lifespan handler; passing one in
    (tests, embedding) skips that and leaves its lifecycle to the caller.
    """
    if settings is None:
        settings = context.settings if context is not None else get_settings()

    app = FastAPI(
        title="KitchenBiz REST API",
        description="Restaurant operations backend: session gate and tenant resolution",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = context

    register_middlewares(app, settings)

    @app.get("/api/health")
    def health_check():
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "service": "rest-api",
            "environment": settings.environment,
        }

    app.include_router(tenant_router)
    app.include_router(profile_router)
    app.include_router(imports_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=get_settings().rest_api_port,
        reload=True,
    )
