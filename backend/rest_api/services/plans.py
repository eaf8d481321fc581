"""
Plans and feature gating.
"""

from typing import Optional, get_args

from rest_api.models import Profile
from shared.utils.schemas import PlanType

PLANS: tuple[str, ...] = get_args(PlanType)
DEFAULT_PLAN: PlanType = "starter"

FEATURE_MATRIX: dict[str, frozenset[str]] = {
    "demo_mode": frozenset({"starter", "basic", "pro", "enterprise"}),
    "staff_accounts": frozenset({"basic", "pro", "enterprise"}),
    "photo_upload": frozenset({"basic", "pro", "enterprise"}),
    "ai_tools": frozenset({"pro", "enterprise"}),
    "forecasting": frozenset({"pro", "enterprise"}),
    "branding_ui": frozenset({"basic", "pro", "enterprise"}),
    "pos_integration": frozenset({"pro", "enterprise"}),
    "api_access": frozenset({"enterprise"}),
}


def effective_plan(profile: Optional[Profile]) -> PlanType:
    """Plan on the profile; unknown, unset or no profile means starter."""
    if profile is None or profile.plan not in PLANS:
        return DEFAULT_PLAN
    return profile.plan  # type: ignore[return-value]


def can_use_feature(plan: str, feature: str) -> bool:
    """Unknown features are never allowed."""
    allowed = FEATURE_MATRIX.get(feature)
    if allowed is None:
        return False
    return plan in allowed


def features_for(plan: str) -> list[str]:
    return sorted(f for f, plans in FEATURE_MATRIX.items() if plan in plans)
