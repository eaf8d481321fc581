"""
Tenancy services: effective tenant resolution and tenant header.
"""

from .effective_tenant import (
    NO_TENANT,
    EffectiveTenant,
    resolve_effective_tenant,
    resolve_effective_tenant_async,
    select_effective_tenant,
)
from .profile_store import (
    AsyncProfileStore,
    ProfileRecord,
    ProfileStore,
    RestProfileStore,
    SqlProfileStore,
)
from .header import fetch_tenant_header

__all__ = [
    "NO_TENANT",
    "EffectiveTenant",
    "resolve_effective_tenant",
    "resolve_effective_tenant_async",
    "select_effective_tenant",
    "AsyncProfileStore",
    "ProfileRecord",
    "ProfileStore",
    "RestProfileStore",
    "SqlProfileStore",
    "fetch_tenant_header",
]
