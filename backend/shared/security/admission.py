"""
Route admission policy.

Decides, from the path, query string and cookie set alone, whether a
request may proceed, must go to the login page, or (already signed in and
asking for the login page) should go home. The policy never touches the
network; the real security boundary is row-level authorization in the
data store.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlencode

from shared.security.auth import InvalidSessionError, verify_session_token
from shared.security.session_cookie import has_session_cookie, read_session_token

if TYPE_CHECKING:
    from shared.config.settings import Settings


class AdmissionAction(str, Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"


@dataclass(frozen=True)
class AdmissionDecision:
    action: AdmissionAction
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.action is AdmissionAction.ALLOW


ALLOW = AdmissionDecision(AdmissionAction.ALLOW)


def _under(path: str, root: str) -> bool:
    """``path`` is ``root`` itself or lives below it."""
    root = root.rstrip("/")
    if not root:
        return False
    return path == root or path.startswith(root + "/")


@dataclass(frozen=True)
class AdmissionPolicy:
    """
    Static gate configuration plus the decision procedure.

    Build one per process with ``AdmissionPolicy.from_settings`` and share
    it; it holds no mutable state.
    """

    session_cookie_name: str
    login_path: str = "/login"
    home_path: str = "/"
    public_paths: frozenset[str] = frozenset({"/", "/login"})
    public_share_root: str = "/share"
    static_prefix: str = "/static"
    favicon_path: str = "/favicon.ico"
    static_extensions: tuple[str, ...] = (".png", ".jpg", ".css", ".js", ".map", ".txt")
    api_prefix: str = "/api"
    # When set, a session only counts if this accepts the cookie's token
    token_verifier: Optional[Callable[[str], Any]] = field(default=None, compare=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> AdmissionPolicy:
        verifier = None
        if settings.session_gate_mode == "verified":
            verifier = partial(verify_session_token, settings=settings)

        return cls(
            session_cookie_name=settings.resolved_session_cookie_name,
            login_path=settings.login_path,
            home_path=settings.home_path,
            public_paths=frozenset(settings.public_paths),
            public_share_root=settings.public_share_root,
            static_prefix=settings.static_prefix,
            favicon_path=settings.favicon_path,
            static_extensions=tuple(ext.lower() for ext in settings.static_extensions),
            api_prefix=settings.api_prefix,
            token_verifier=verifier,
        )

    # ------------------------------------------------------------------
    # Path classification
    # ------------------------------------------------------------------

    def is_static(self, path: str) -> bool:
        if _under(path, self.static_prefix) or path == self.favicon_path:
            return True
        return path.lower().endswith(self.static_extensions)

    def is_public(self, path: str) -> bool:
        return (
            path in self.public_paths
            or _under(path, self.public_share_root)
            or self.is_static(path)
        )

    def is_excluded(self, path: str) -> bool:
        """API routes authorize per handler and are never gated."""
        return _under(path, self.api_prefix)

    # ------------------------------------------------------------------
    # Session check
    # ------------------------------------------------------------------

    def has_session(self, cookies: Mapping[str, str] | None) -> bool:
        if not has_session_cookie(cookies, self.session_cookie_name):
            return False
        if self.token_verifier is None:
            return True

        try:
            token = read_session_token(cookies, self.session_cookie_name)
            if token is None:
                return False
            self.token_verifier(token)
        except InvalidSessionError:
            return False
        except Exception:
            # fail closed
            return False
        return True

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    def login_location(self, path: str, query: str = "") -> str:
        target = f"{path}?{query}" if query else path
        return f"{self.login_path}?{urlencode({'redirect': target})}"

    def decide(
        self,
        path: str,
        query: str = "",
        cookies: Mapping[str, str] | None = None,
    ) -> AdmissionDecision:
        if self.is_excluded(path):
            return ALLOW

        # The login page is public, but a signed-in visitor is sent home
        # instead of seeing it again.
        if path == self.login_path:
            if self.has_session(cookies):
                return AdmissionDecision(AdmissionAction.REDIRECT_HOME, self.home_path)
            return ALLOW

        if self.is_public(path):
            return ALLOW

        if not self.has_session(cookies):
            return AdmissionDecision(
                AdmissionAction.REDIRECT_LOGIN, self.login_location(path, query)
            )

        return ALLOW
