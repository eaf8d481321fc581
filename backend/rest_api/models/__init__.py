"""
SQLAlchemy ORM Models Package.

- base: Base class and TimestampMixin
- tenant: Tenant
- profile: Profile
"""

from .base import Base, TimestampMixin
from .tenant import Tenant
from .profile import Profile

__all__ = [
    "Base",
    "TimestampMixin",
    "Tenant",
    "Profile",
]
