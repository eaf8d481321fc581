"""
HTTP middlewares for the FastAPI application.
Route admission gate, request correlation and CORS.
"""

from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from shared.config.logging import gate_logger as logger
from shared.config.settings import Settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.security.admission import AdmissionPolicy

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = [
    "Authorization",
    "Content-Type",
    "X-Request-ID",
    "Accept",
    "Accept-Language",
    "Cache-Control",
]


class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Run the admission policy before any page handler.

    Unauthenticated requests for protected pages get a 302 to the login
    page carrying the original path and query as ``redirect``; a signed-in
    visitor asking for the login page gets a 302 home. API routes and
    public pages pass straight through.
    """

    def __init__(self, app: ASGIApp, policy: AdmissionPolicy):
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            cookies = request.cookies
        except Exception:
            logger.warning("Unreadable cookie header, treating request as anonymous")
            cookies = {}

        decision = self.policy.decide(request.url.path, request.url.query, cookies)
        if decision.allowed:
            return await call_next(request)
        return RedirectResponse(decision.location, status_code=302)


def register_middlewares(app: FastAPI, settings: Settings) -> None:
    """
    Register all middlewares on the FastAPI application.

    Middlewares run in reverse order of registration: CORS first, then
    correlation IDs, then the session gate.
    """
    app.add_middleware(SessionGateMiddleware, policy=AdmissionPolicy.from_settings(settings))
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
        max_age=0 if settings.environment == "development" else 600,
    )
