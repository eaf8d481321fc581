"""
Tenant: the partition every business record belongs to.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Tenant(TimestampMixin, Base):
    """
    One restaurant account. Row-level policies in the data store scope
    inventory, recipes, menus, sales and staff to a tenant id.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    business_name: Mapped[Optional[str]] = mapped_column(Text)
    business_blurb: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name='{self.name}')>"
