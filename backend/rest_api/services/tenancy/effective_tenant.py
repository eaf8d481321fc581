"""
Effective tenant resolution.

Maps the calling user to the tenant whose data the request should read:
their own tenant, or the shared demo tenant when they have opted into
demo mode. Every failure collapses to "no tenant"; nothing here raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rest_api.services.tenancy.profile_store import (
    AsyncProfileStore,
    ProfileRecord,
    ProfileStore,
)
from shared.config.logging import mask_user_id, tenancy_logger as logger
from shared.utils.exceptions import ProfileLookupError


@dataclass(frozen=True)
class EffectiveTenant:
    tenant_id: Optional[str]
    use_demo: bool

    def to_dict(self) -> dict:
        return {"tenant_id": self.tenant_id, "use_demo": self.use_demo}


NO_TENANT = EffectiveTenant(tenant_id=None, use_demo=False)


def select_effective_tenant(
    profile: Optional[ProfileRecord],
    demo_tenant_id: str,
) -> EffectiveTenant:
    """
    The substitution rule shared by every call site.

    Demo mode wins over the user's own tenant, even when one is assigned.
    A profile without a tenant resolves to ``tenant_id=None``.
    """
    if profile is None:
        return NO_TENANT
    if profile.use_demo:
        return EffectiveTenant(tenant_id=demo_tenant_id, use_demo=True)
    return EffectiveTenant(tenant_id=profile.tenant_id, use_demo=False)


def _lookup_failed(user_id: str, exc: Exception) -> EffectiveTenant:
    logger.warning(
        "Profile lookup failed, resolving to no tenant",
        user_id=mask_user_id(user_id),
        error=str(exc),
    )
    return NO_TENANT


def resolve_effective_tenant(
    user_id: Optional[str],
    store: ProfileStore,
    demo_tenant_id: str,
) -> EffectiveTenant:
    """Resolve with a synchronous store (server-side database session)."""
    if not user_id:
        return NO_TENANT

    try:
        profile = store.get_profile(user_id)
    except ProfileLookupError as exc:
        return _lookup_failed(user_id, exc)
    except Exception:
        logger.error("Unexpected profile store error", user_id=mask_user_id(user_id), exc_info=True)
        return NO_TENANT

    return select_effective_tenant(profile, demo_tenant_id)


async def resolve_effective_tenant_async(
    user_id: Optional[str],
    store: AsyncProfileStore,
    demo_tenant_id: str,
) -> EffectiveTenant:
    """Resolve with an async store (REST data API as the caller)."""
    if not user_id:
        return NO_TENANT

    try:
        profile = await store.get_profile(user_id)
    except ProfileLookupError as exc:
        return _lookup_failed(user_id, exc)
    except Exception:
        logger.error("Unexpected profile store error", user_id=mask_user_id(user_id), exc_info=True)
        return NO_TENANT

    return select_effective_tenant(profile, demo_tenant_id)
