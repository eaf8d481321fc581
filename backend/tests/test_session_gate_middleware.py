"""
Tests for the session gate middleware and request correlation.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from rest_api.core.middlewares import SessionGateMiddleware, register_middlewares
from shared.infrastructure.correlation import CorrelationIdMiddleware, get_request_id
from shared.security.admission import AdmissionPolicy
from tests.conftest import SESSION_COOKIE, cookie_header, session_headers


# =============================================================================
# SessionGateMiddleware Tests
# =============================================================================


class TestSessionGateMiddleware:
    """Gate in front of a catch-all page handler."""

    @pytest.fixture
    def gated_client(self, settings):
        app = FastAPI()
        app.add_middleware(SessionGateMiddleware, policy=AdmissionPolicy.from_settings(settings))

        @app.get("/{page:path}")
        def page(page: str):
            return {"page": page}

        return TestClient(app, follow_redirects=False)

    def test_protected_page_redirects_anonymous(self, gated_client):
        response = gated_client.get("/inventory/purchase")

        assert response.status_code == 302
        assert response.headers["location"] == "/login?redirect=%2Finventory%2Fpurchase"

    def test_redirect_keeps_query(self, gated_client):
        response = gated_client.get("/sales/manage?from=2025-01-01&to=2025-01-31")

        assert response.status_code == 302
        assert response.headers["location"] == (
            "/login?redirect=%2Fsales%2Fmanage%3Ffrom%3D2025-01-01%26to%3D2025-01-31"
        )

    def test_protected_page_with_cookie_passes(self, gated_client):
        response = gated_client.get("/recipes", headers=cookie_header({SESSION_COOKIE: "x"}))

        assert response.status_code == 200
        assert response.json() == {"page": "recipes"}

    def test_public_page_passes_without_cookie(self, gated_client):
        assert gated_client.get("/share/tok123").status_code == 200
        assert gated_client.get("/").status_code == 200

    def test_login_with_cookie_goes_home(self, gated_client):
        response = gated_client.get(
            "/login?redirect=%2Fmenu", headers=cookie_header({f"{SESSION_COOKIE}.0": "x"})
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_api_route_not_redirected(self, gated_client):
        response = gated_client.get("/api/anything")
        assert response.status_code == 200

    def test_unreadable_cookies_count_as_anonymous(self, gated_client, monkeypatch):
        def broken_cookies(self):
            raise ValueError("malformed Cookie header")

        monkeypatch.setattr(Request, "cookies", property(broken_cookies))
        response = gated_client.get("/recipes", headers=session_headers())

        assert response.status_code == 302
        assert response.headers["location"] == "/login?redirect=%2Frecipes"


# =============================================================================
# Full application (end-to-end scenarios)
# =============================================================================


class TestApplicationGate:

    def test_purchase_page_without_cookies(self, client):
        response = client.get("/inventory/purchase")

        assert response.status_code == 302
        assert response.headers["location"] == "/login?redirect=%2Finventory%2Fpurchase"

    def test_login_with_valid_session(self, client):
        response = client.get("/login", headers=session_headers())

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_signed_in_page_request_reaches_routing(self, client):
        # No page handlers are mounted; a 404 proves the gate let it through.
        response = client.get("/inventory/purchase", headers=session_headers())
        assert response.status_code == 404

    def test_api_is_not_gated(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# =============================================================================
# Correlation ID Tests
# =============================================================================


class TestCorrelationIdMiddleware:

    @pytest.fixture
    def correlated_client(self):
        app = FastAPI()
        app.add_middleware(CorrelationIdMiddleware)

        @app.get("/echo")
        def echo():
            return {"request_id": get_request_id()}

        return TestClient(app)

    def test_generates_request_id(self, correlated_client):
        response = correlated_client.get("/echo")

        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36
        assert response.json()["request_id"] == request_id

    def test_propagates_incoming_request_id(self, correlated_client):
        response = correlated_client.get("/echo", headers={"X-Request-ID": "req-abc"})

        assert response.headers["X-Request-ID"] == "req-abc"
        assert response.json()["request_id"] == "req-abc"

    def test_context_is_reset_after_request(self, correlated_client):
        correlated_client.get("/echo")
        assert get_request_id() == ""

    def test_registered_on_application(self, settings):
        app = FastAPI()
        register_middlewares(app, settings)

        @app.get("/api/ping")
        def ping():
            return {"ok": True}

        response = TestClient(app).get("/api/ping")
        assert "X-Request-ID" in response.headers
