"""
Tenant routers - /api/tenant/*
Effective tenant resolution and business header.
"""

from .routes import router

__all__ = ["router"]
