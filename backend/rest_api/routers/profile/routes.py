"""
Profile settings and plan endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.core.context import current_identity, get_db, require_identity
from rest_api.models import Profile
from rest_api.services.plans import effective_plan, features_for
from shared.config.logging import auth_logger as logger, mask_user_id
from shared.infrastructure.db import safe_commit
from shared.security.auth import SessionIdentity
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import (
    ErrorResponse,
    PlanResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)

router = APIRouter(prefix="/api", tags=["profile"])

DISPLAY_NAME_MAX = 120


@router.post(
    "/profile/update",
    response_model=ProfileUpdateResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_profile(
    body: ProfileUpdateRequest,
    identity: SessionIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
) -> ProfileUpdateResponse:
    """
    Update the caller's display name and demo-mode toggle.

    Turning ``use_demo`` on switches all tenant-scoped reads to the demo
    tenant on the next resolution; the profile's own tenant is kept.
    """
    profile = db.get(Profile, identity.user_id)
    if profile is None:
        raise NotFoundError("Profile", user_id=mask_user_id(identity.user_id))

    profile.display_name = (body.display_name or "")[:DISPLAY_NAME_MAX]
    profile.use_demo = bool(body.use_demo)
    safe_commit(db)

    logger.info(
        "Profile updated",
        user_id=mask_user_id(identity.user_id),
        use_demo=profile.use_demo,
    )
    return ProfileUpdateResponse(
        display_name=profile.display_name,
        use_demo=profile.use_demo,
    )


@router.get("/plan", response_model=PlanResponse)
def get_plan(
    identity: Optional[SessionIdentity] = Depends(current_identity),
    db: Session = Depends(get_db),
) -> PlanResponse:
    """The caller's plan; anonymous callers are on starter."""
    profile = db.get(Profile, identity.user_id) if identity else None
    plan = effective_plan(profile)
    return PlanResponse(plan=plan, features=features_for(plan))
