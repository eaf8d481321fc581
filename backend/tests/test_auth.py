"""
Tests for access token verification and identity resolution.
"""

import pytest
from starlette.requests import Request

from shared.security.auth import (
    InvalidSessionError,
    get_bearer_token,
    resolve_identity,
    verify_session_token,
)
from tests.conftest import (
    SESSION_COOKIE,
    USER_ID,
    cookie_header,
    make_token,
    session_cookie_value,
)


def build_request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw, "query_string": b""})


class TestVerifySessionToken:

    def test_valid_token(self, settings):
        payload = verify_session_token(make_token(), settings)
        assert payload["sub"] == USER_ID
        assert payload["email"] == "owner@kitchen.test"

    def test_expired(self, settings):
        with pytest.raises(InvalidSessionError, match="expired"):
            verify_session_token(make_token(expires_in=-10), settings)

    def test_wrong_secret(self, settings):
        token = make_token(secret="another-secret-another-secret-another")
        with pytest.raises(InvalidSessionError):
            verify_session_token(token, settings)

    def test_wrong_audience(self, settings):
        with pytest.raises(InvalidSessionError):
            verify_session_token(make_token(audience="anon"), settings)

    def test_garbage(self, settings):
        with pytest.raises(InvalidSessionError):
            verify_session_token("not-a-jwt", settings)

    def test_empty_subject(self, settings):
        with pytest.raises(InvalidSessionError, match="subject"):
            verify_session_token(make_token(user_id=""), settings)


class TestGetBearerToken:

    def test_bearer(self):
        assert get_bearer_token(build_request({"Authorization": "Bearer abc"})) == "abc"

    def test_case_insensitive_scheme(self):
        assert get_bearer_token(build_request({"Authorization": "bearer abc"})) == "abc"

    def test_other_scheme(self):
        assert get_bearer_token(build_request({"Authorization": "Basic abc"})) is None

    def test_missing(self):
        assert get_bearer_token(build_request()) is None
        assert get_bearer_token(build_request({"Authorization": "Bearer "})) is None


class TestResolveIdentity:

    def test_from_session_cookie(self, settings):
        token = make_token()
        request = build_request(cookie_header({SESSION_COOKIE: session_cookie_value(token)}))

        identity = resolve_identity(request, settings)

        assert identity is not None
        assert identity.user_id == USER_ID
        assert identity.access_token == token

    def test_from_bearer_header(self, settings):
        token = make_token()
        identity = resolve_identity(build_request({"Authorization": f"Bearer {token}"}), settings)
        assert identity.user_id == USER_ID

    def test_bearer_wins_over_cookie(self, settings):
        headers = {
            "Authorization": f"Bearer {make_token('from-header')}",
            **cookie_header({SESSION_COOKIE: session_cookie_value(make_token("from-cookie"))}),
        }
        assert resolve_identity(build_request(headers), settings).user_id == "from-header"

    def test_no_credentials(self, settings):
        assert resolve_identity(build_request(), settings) is None

    def test_opaque_cookie_is_anonymous(self, settings):
        request = build_request(cookie_header({SESSION_COOKIE: "opaque"}))
        assert resolve_identity(request, settings) is None

    def test_expired_is_anonymous(self, settings):
        request = build_request(
            cookie_header({SESSION_COOKIE: session_cookie_value(make_token(expires_in=-5))})
        )
        assert resolve_identity(request, settings) is None
