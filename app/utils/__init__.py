"""GymPortal API - Utilities Package."""

from app.utils.errors import (
    GymPortalException,
    NotFoundError,
    ValidationError,
    InvalidTimestampError,
    NotTodayError,
    ForbiddenError,
)

__all__ = [
    "GymPortalException",
    "NotFoundError",
    "ValidationError",
    "InvalidTimestampError",
    "NotTodayError",
    "ForbiddenError",
]
