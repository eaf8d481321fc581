"""
Application context and the FastAPI dependencies that read from it.

One ``AppContext`` is built at startup and hung on ``app.state.context``.
Everything that talks to the backend (database engine, REST client)
lives here instead of in module globals, so tests swap the whole thing.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Depends, Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from shared.config.settings import Settings
from shared.infrastructure.db import create_db_engine, create_session_factory
from shared.security.auth import SessionIdentity, resolve_identity
from shared.utils.exceptions import UnauthorizedError


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    http: httpx.AsyncClient

    async def close(self) -> None:
        await self.http.aclose()
        self.engine.dispose()


def build_app_context(
    settings: Settings,
    http: Optional[httpx.AsyncClient] = None,
) -> AppContext:
    engine = create_db_engine(settings.database_url)
    if http is None:
        http = httpx.AsyncClient(
            timeout=settings.profile_lookup_timeout,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        http=http,
    )


# =============================================================================
# Dependencies
# =============================================================================


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_app_settings(ctx: AppContext = Depends(get_app_context)) -> Settings:
    return ctx.settings


def get_db(ctx: AppContext = Depends(get_app_context)) -> Generator[Session, None, None]:
    """
    Per-request database session, closed after the response.

        @router.get("/items")
        def list_items(db: Session = Depends(get_db)): ...
    """
    db = ctx.session_factory()
    try:
        yield db
    finally:
        db.close()


def current_identity(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[SessionIdentity]:
    """The caller, or None when not signed in."""
    return resolve_identity(request, settings)


def require_identity(
    identity: Optional[SessionIdentity] = Depends(current_identity),
) -> SessionIdentity:
    if identity is None:
        raise UnauthorizedError()
    return identity
