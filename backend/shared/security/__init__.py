"""
Security module: session cookies, identity and route admission.
"""

from shared.security.session_cookie import (
    has_session_cookie,
    read_session_token,
)
from shared.security.auth import (
    InvalidSessionError,
    SessionIdentity,
    get_bearer_token,
    resolve_identity,
    verify_session_token,
)
from shared.security.admission import (
    AdmissionAction,
    AdmissionDecision,
    AdmissionPolicy,
)

__all__ = [
    # session cookie
    "has_session_cookie",
    "read_session_token",
    # auth
    "InvalidSessionError",
    "SessionIdentity",
    "get_bearer_token",
    "resolve_identity",
    "verify_session_token",
    # admission
    "AdmissionAction",
    "AdmissionDecision",
    "AdmissionPolicy",
]
