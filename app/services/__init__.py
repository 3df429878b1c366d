"""GymPortal API - Services Package."""

from .auth import (
    create_access_token,
    verify_token,
)

__all__ = [
    "create_access_token",
    "verify_token",
]
