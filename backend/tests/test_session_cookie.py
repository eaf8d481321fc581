"""
Tests for session cookie presence and decoding.
"""

import base64
import json

from shared.security.session_cookie import (
    decode_session_value,
    has_session_cookie,
    join_session_chunks,
    read_session_token,
)
from tests.conftest import SESSION_COOKIE, session_cookie_value


class ExplodingCookies(dict):
    def keys(self):
        raise RuntimeError("cookie jar corrupted")


class TestHasSessionCookie:
    """Presence check (no decoding)."""

    def test_exact_name(self):
        assert has_session_cookie({SESSION_COOKIE: "x"}, SESSION_COOKIE) is True

    def test_chunked_prefix(self):
        assert has_session_cookie({f"{SESSION_COOKIE}.0": "x"}, SESSION_COOKIE) is True

    def test_any_prefixed_name(self):
        assert has_session_cookie({f"{SESSION_COOKIE}-code-verifier": "x"}, SESSION_COOKIE) is True

    def test_unrelated_cookies(self):
        cookies = {"theme": "dark", "sb-otherproj-auth-token": "x"}
        assert has_session_cookie(cookies, SESSION_COOKIE) is False

    def test_empty_and_none(self):
        assert has_session_cookie({}, SESSION_COOKIE) is False
        assert has_session_cookie(None, SESSION_COOKIE) is False

    def test_value_is_not_inspected(self):
        """An empty or garbage value still counts as a session."""
        assert has_session_cookie({SESSION_COOKIE: ""}, SESSION_COOKIE) is True
        assert has_session_cookie({SESSION_COOKIE: "%%%"}, SESSION_COOKIE) is True

    def test_errors_mean_no_session(self):
        assert has_session_cookie(ExplodingCookies({SESSION_COOKIE: "x"}), SESSION_COOKIE) is False


class TestJoinSessionChunks:

    def test_plain_cookie_wins(self):
        cookies = {SESSION_COOKIE: "whole", f"{SESSION_COOKIE}.0": "part"}
        assert join_session_chunks(cookies, SESSION_COOKIE) == "whole"

    def test_chunks_joined_in_numeric_order(self):
        cookies = {
            f"{SESSION_COOKIE}.10": "k",
            f"{SESSION_COOKIE}.1": "b",
            f"{SESSION_COOKIE}.0": "a",
        }
        # .10 is unreachable without .2 ... .9
        assert join_session_chunks(cookies, SESSION_COOKIE) == "ab"

    def test_missing_first_chunk(self):
        assert join_session_chunks({f"{SESSION_COOKIE}.1": "b"}, SESSION_COOKIE) is None

    def test_non_numeric_suffix_ignored(self):
        cookies = {f"{SESSION_COOKIE}.0": "a", f"{SESSION_COOKIE}.x": "zzz"}
        assert join_session_chunks(cookies, SESSION_COOKIE) == "a"


class TestReadSessionToken:

    def test_base64_object(self):
        cookies = {SESSION_COOKIE: session_cookie_value("tok-123")}
        assert read_session_token(cookies, SESSION_COOKIE) == "tok-123"

    def test_raw_json_object(self):
        cookies = {SESSION_COOKIE: session_cookie_value("tok-raw", encoded=False)}
        assert read_session_token(cookies, SESSION_COOKIE) == "tok-raw"

    def test_legacy_array(self):
        cookies = {SESSION_COOKIE: json.dumps(["tok-legacy", "refresh", None])}
        assert read_session_token(cookies, SESSION_COOKIE) == "tok-legacy"

    def test_chunked_base64(self):
        value = session_cookie_value("tok-chunked")
        middle = len(value) // 2
        cookies = {
            f"{SESSION_COOKIE}.0": value[:middle],
            f"{SESSION_COOKIE}.1": value[middle:],
        }
        assert read_session_token(cookies, SESSION_COOKIE) == "tok-chunked"

    def test_garbage_returns_none(self):
        assert read_session_token({SESSION_COOKIE: "base64-!!!"}, SESSION_COOKIE) is None
        assert read_session_token({SESSION_COOKIE: "not json"}, SESSION_COOKIE) is None
        assert read_session_token({SESSION_COOKIE: json.dumps({"user": 1})}, SESSION_COOKIE) is None
        assert read_session_token({SESSION_COOKIE: json.dumps(42)}, SESSION_COOKIE) is None

    def test_no_cookie(self):
        assert read_session_token({}, SESSION_COOKIE) is None
        assert read_session_token(None, SESSION_COOKIE) is None

    def test_decode_unpadded_base64(self):
        payload = json.dumps({"access_token": "t"}).encode()
        encoded = base64.urlsafe_b64encode(payload).decode().rstrip("=")
        assert decode_session_value("base64-" + encoded) == {"access_token": "t"}
