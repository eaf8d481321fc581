"""
Shared Pydantic schemas used by the REST API.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

PlanType = Literal["starter", "basic", "pro", "enterprise"]


class ErrorResponse(BaseModel):
    detail: str


# =============================================================================
# Tenancy
# =============================================================================


class EffectiveTenantResponse(BaseModel):
    """Tenant the caller's tenant-scoped reads should use."""

    tenant_id: Optional[str]
    use_demo: bool


class TenantHeaderResponse(BaseModel):
    tenant_id: Optional[str]
    use_demo: bool
    biz_name: str
    biz_blurb: str


# =============================================================================
# Profile / plan
# =============================================================================


class ProfileUpdateRequest(BaseModel):
    """Both fields accept null, read as "" and false."""

    display_name: Optional[str] = ""
    use_demo: Optional[bool] = False


class ProfileUpdateResponse(BaseModel):
    ok: bool = True
    display_name: str
    use_demo: bool


class PlanResponse(BaseModel):
    plan: PlanType
    features: list[str] = Field(default_factory=list)


# =============================================================================
# Imports
# =============================================================================


class ImportPreviewRequest(BaseModel):
    type: str = "receipts"
    csv: str
