"""
Profile routers - /api/profile/*, /api/plan
"""

from .routes import router

__all__ = ["router"]
