"""
Profile: one row per authenticated user.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Profile(TimestampMixin, Base):
    """
    Created on first sign-in. ``id`` is the auth provider's user id.

    ``use_demo`` switches every tenant-scoped read to the shared demo
    tenant; ``tenant_id`` stays untouched while it is on.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    tenant_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("tenants.id"), nullable=True, index=True
    )
    use_demo: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(String(120))
    plan: Mapped[str] = mapped_column(Text, default="starter", nullable=False)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, tenant_id={self.tenant_id}, use_demo={self.use_demo})>"
