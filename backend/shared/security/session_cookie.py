"""
Session cookie helpers.

The auth provider stores the browser session in a cookie named
``sb-<project-ref>-auth-token``. Large sessions are split across
``<name>.0``, ``<name>.1``, ... which must be concatenated in order.
The value is either raw JSON or ``base64-`` followed by base64url JSON.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any, Optional

BASE64_PREFIX = "base64-"


def has_session_cookie(cookies: Mapping[str, str] | None, cookie_name: str) -> bool:
    """
    True when any cookie is named ``cookie_name`` or starts with it.

    Presence only: the value is not decoded or verified. Anything unexpected
    while reading the cookie set counts as "no session".
    """
    if not cookies or not cookie_name:
        return False
    try:
        return any(
            name == cookie_name or name.startswith(cookie_name)
            for name in cookies.keys()
        )
    except Exception:
        return False


def _chunk_index(name: str, cookie_name: str) -> Optional[int]:
    suffix = name[len(cookie_name):]
    if not suffix.startswith("."):
        return None
    try:
        return int(suffix[1:])
    except ValueError:
        return None


def join_session_chunks(cookies: Mapping[str, str], cookie_name: str) -> Optional[str]:
    """
    Return the full session cookie value.

    A plain ``cookie_name`` cookie wins; otherwise numbered chunks are
    concatenated from ``.0`` upward and stop at the first gap.
    """
    if cookie_name in cookies:
        return cookies[cookie_name]

    chunks: dict[int, str] = {}
    for name, value in cookies.items():
        if not name.startswith(cookie_name):
            continue
        idx = _chunk_index(name, cookie_name)
        if idx is not None:
            chunks[idx] = value

    if 0 not in chunks:
        return None

    parts = []
    i = 0
    while i in chunks:
        parts.append(chunks[i])
        i += 1
    return "".join(parts)


def decode_session_value(raw: str) -> Any:
    """Decode a session cookie value into its JSON payload."""
    if raw.startswith(BASE64_PREFIX):
        encoded = raw[len(BASE64_PREFIX):]
        padded = encoded + "=" * (-len(encoded) % 4)
        raw = base64.urlsafe_b64decode(padded).decode("utf-8")
    return json.loads(raw)


def read_session_token(cookies: Mapping[str, str] | None, cookie_name: str) -> Optional[str]:
    """
    Extract the access token from the session cookie, or None.

    Accepts the object form ``{"access_token": ...}`` and the legacy array
    form whose first element is the access token.
    """
    if not cookies or not cookie_name:
        return None

    try:
        raw = join_session_chunks(cookies, cookie_name)
        if not raw:
            return None
        session = decode_session_value(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    if isinstance(session, dict):
        token = session.get("access_token")
    elif isinstance(session, list) and session:
        token = session[0]
    else:
        token = None

    return token if isinstance(token, str) and token else None
