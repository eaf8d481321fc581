"""
Effective tenant endpoints.

Both resolution endpoints apply the same demo-tenant rule; they differ
only in how the profile row is read (server database session vs. the
backend REST API acting as the caller).
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.core.context import (
    AppContext,
    current_identity,
    get_app_context,
    get_app_settings,
    get_db,
)
from rest_api.services.tenancy import (
    NO_TENANT,
    RestProfileStore,
    SqlProfileStore,
    fetch_tenant_header,
    resolve_effective_tenant,
    resolve_effective_tenant_async,
)
from shared.config.settings import Settings
from shared.security.auth import SessionIdentity
from shared.utils.schemas import EffectiveTenantResponse, TenantHeaderResponse

router = APIRouter(prefix="/api/tenant", tags=["tenant"])


@router.get("/effective", response_model=EffectiveTenantResponse)
def get_effective_tenant(
    identity: Optional[SessionIdentity] = Depends(current_identity),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> EffectiveTenantResponse:
    """Resolve the caller's effective tenant from the server database."""
    tenant = resolve_effective_tenant(
        identity.user_id if identity else None,
        SqlProfileStore(db),
        settings.demo_tenant_id,
    )
    return EffectiveTenantResponse(**tenant.to_dict())


@router.get("/effective/session", response_model=EffectiveTenantResponse)
async def get_effective_tenant_as_caller(
    identity: Optional[SessionIdentity] = Depends(current_identity),
    ctx: AppContext = Depends(get_app_context),
) -> EffectiveTenantResponse:
    """
    Resolve the caller's effective tenant through the REST data API using
    the caller's own token, so row-level policies decide what is visible.
    """
    if identity is None:
        return EffectiveTenantResponse(**NO_TENANT.to_dict())

    settings = ctx.settings
    store = RestProfileStore(
        ctx.http,
        settings.rest_url,
        settings.supabase_anon_key,
        identity.access_token,
        timeout=settings.profile_lookup_timeout,
    )
    tenant = await resolve_effective_tenant_async(
        identity.user_id, store, settings.demo_tenant_id
    )
    return EffectiveTenantResponse(**tenant.to_dict())


@router.get("/header", response_model=TenantHeaderResponse)
def get_tenant_header(
    identity: Optional[SessionIdentity] = Depends(current_identity),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> TenantHeaderResponse:
    """Business name and blurb of the caller's effective tenant."""
    tenant = resolve_effective_tenant(
        identity.user_id if identity else None,
        SqlProfileStore(db),
        settings.demo_tenant_id,
    )
    header = fetch_tenant_header(db, tenant.tenant_id)
    return TenantHeaderResponse(**tenant.to_dict(), **header)
