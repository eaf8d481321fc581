"""
Authentication helpers.

Identity comes from the hosted auth provider: its access token is an HS256
JWT signed with the project JWT secret, carried either in an
``Authorization: Bearer`` header (API clients) or inside the session
cookie (browsers).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import jwt
from starlette.requests import HTTPConnection

from shared.config.logging import auth_logger as logger
from shared.security.session_cookie import read_session_token

if TYPE_CHECKING:
    from shared.config.settings import Settings


class InvalidSessionError(Exception):
    """The access token is missing, malformed, expired or badly signed."""


@dataclass(frozen=True)
class SessionIdentity:
    """The authenticated caller as seen by this backend."""

    user_id: str
    email: Optional[str]
    access_token: str


def verify_session_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        InvalidSessionError: signature, audience, expiry or claims are wrong.
    """
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.supabase_jwt_audience,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidSessionError("Session token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidSessionError("Invalid session token") from exc

    if not isinstance(payload.get("sub"), str) or not payload["sub"]:
        raise InvalidSessionError("Invalid session token: malformed subject claim")

    return payload


def get_bearer_token(connection: HTTPConnection) -> Optional[str]:
    """Token from ``Authorization: Bearer <token>``, if any."""
    header = connection.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_identity(connection: HTTPConnection, settings: Settings) -> Optional[SessionIdentity]:
    """
    Who is calling, or None.

    The bearer header wins over the session cookie. Any verification
    failure means "no authenticated user"; this function never raises.
    """
    token = get_bearer_token(connection)
    if token is None:
        try:
            token = read_session_token(
                connection.cookies, settings.resolved_session_cookie_name
            )
        except Exception:
            token = None
    if not token:
        return None

    try:
        payload = verify_session_token(token, settings)
    except InvalidSessionError as exc:
        logger.debug("Session token rejected", reason=str(exc))
        return None

    return SessionIdentity(
        user_id=payload["sub"],
        email=payload.get("email"),
        access_token=token,
    )
