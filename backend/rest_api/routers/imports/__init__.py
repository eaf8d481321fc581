"""
Import routers - /api/import/*
CSV templates and dry-run previews.
"""

from .routes import router

__all__ = ["router"]
