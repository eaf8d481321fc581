"""
Pytest configuration and fixtures for backend tests.
"""

import base64
import json
import time

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient

from rest_api.core.context import AppContext
from rest_api.main import create_app
from rest_api.models import Base, Profile, Tenant
from shared.config.settings import Settings
from shared.infrastructure.db import create_db_engine, create_session_factory


JWT_SECRET = "test-jwt-secret-that-is-long-enough-for-hs256"
PROJECT_URL = "https://testproj.supabase.co"
SESSION_COOKIE = "sb-testproj-auth-token"

DEMO_TENANT_ID = "00000000-0000-4000-8000-0000000de000"
OWN_TENANT_ID = "11111111-1111-4111-8111-111111111111"
USER_ID = "aaaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa"
DEMO_USER_ID = "bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb"
NEW_USER_ID = "cccccccc-cccc-4ccc-8ccc-cccccccccccc"


# =============================================================================
# Token / cookie helpers
# =============================================================================


def make_token(
    user_id: str = USER_ID,
    *,
    expires_in: int = 3600,
    secret: str = JWT_SECRET,
    audience: str = "authenticated",
    email: str = "owner@kitchen.test",
) -> str:
    """Access token shaped like the auth provider's."""
    now = int(time.time())
    return jwt.encode(
        {
            "sub": user_id,
            "email": email,
            "aud": audience,
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        },
        secret,
        algorithm="HS256",
    )


def session_cookie_value(token: str, *, encoded: bool = True) -> str:
    """Session cookie value carrying ``token``."""
    session = json.dumps(
        {"access_token": token, "refresh_token": "refresh", "token_type": "bearer"}
    )
    if not encoded:
        return session
    return "base64-" + base64.urlsafe_b64encode(session.encode()).decode().rstrip("=")


def cookie_header(cookies: dict[str, str]) -> dict[str, str]:
    return {"Cookie": "; ".join(f"{k}={v}" for k, v in cookies.items())}


def session_headers(user_id: str = USER_ID, **token_kwargs) -> dict[str, str]:
    """Request headers for a browser signed in as ``user_id``."""
    token = make_token(user_id, **token_kwargs)
    return cookie_header({SESSION_COOKIE: session_cookie_value(token)})


def bearer_headers(user_id: str = USER_ID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


# =============================================================================
# Settings / database
# =============================================================================


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite:///:memory:",
        supabase_url=PROJECT_URL,
        supabase_anon_key="anon-key",
        supabase_jwt_secret=JWT_SECRET,
        demo_tenant_id=DEMO_TENANT_ID,
        environment="test",
        debug=False,
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed_tenants(db_session):
    own = Tenant(
        id=OWN_TENANT_ID,
        name="marios",
        business_name="Mario's Pizzeria",
        business_blurb="Wood-fired since 1998",
    )
    demo = Tenant(id=DEMO_TENANT_ID, name="Demo Kitchen")
    db_session.add_all([own, demo])
    db_session.commit()
    return own, demo


@pytest.fixture
def seed_profiles(db_session, seed_tenants):
    """Three users: own tenant (pro), demo mode, and no tenant yet."""
    profiles = [
        Profile(id=USER_ID, tenant_id=OWN_TENANT_ID, use_demo=False, plan="pro"),
        Profile(id=DEMO_USER_ID, tenant_id=OWN_TENANT_ID, use_demo=True),
        Profile(id=NEW_USER_ID, tenant_id=None, use_demo=False),
    ]
    db_session.add_all(profiles)
    db_session.commit()
    return profiles


# =============================================================================
# Backend REST API stand-in
# =============================================================================


class FakeRestApi:
    """
    Minimal ``/rest/v1/profiles`` endpoint for httpx.MockTransport.

    Rows are only visible to a request whose bearer token belongs to the
    row's own user, like a row-level policy on ``profiles``.
    """

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "unavailable"})
        if not request.url.path.endswith("/rest/v1/profiles"):
            return httpx.Response(404, json={"message": "not found"})

        token = request.headers.get("authorization", "").removeprefix("Bearer ")
        try:
            caller = jwt.decode(
                token, JWT_SECRET, algorithms=["HS256"], audience="authenticated"
            )["sub"]
        except jwt.InvalidTokenError:
            return httpx.Response(401, json={"message": "JWT invalid"})

        wanted = request.url.params.get("id", "").removeprefix("eq.")
        row = self.rows.get(wanted)
        if row is None or wanted != caller:
            return httpx.Response(200, json=[])
        return httpx.Response(200, json=[row])


@pytest.fixture
def rest_api(seed_profiles):
    api = FakeRestApi()
    for profile in seed_profiles:
        api.rows[profile.id] = {"tenant_id": profile.tenant_id, "use_demo": profile.use_demo}
    return api


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def app_context(settings, engine, rest_api):
    http = httpx.AsyncClient(transport=httpx.MockTransport(rest_api))
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        http=http,
    )


@pytest.fixture
def client(app_context):
    """TestClient that does not follow redirects, so gate decisions are visible."""
    app = create_app(context=app_context)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
