"""
Utilities module: exceptions and costing helpers.
"""

from shared.utils.exceptions import (
    AppException,
    ForbiddenError,
    NotFoundError,
    ProfileLookupError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "AppException",
    "ForbiddenError",
    "NotFoundError",
    "ProfileLookupError",
    "UnauthorizedError",
    "ValidationError",
]
