"""
GymPortal API - FastAPI Dependencies.

Dependency injection helpers for routes.
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, HTTPException, status

from app.middleware.auth import jwt_bearer
from app.services.day_keys import utc_now


Clock = Callable[[], datetime]


async def get_current_user_id(
    user_id: str = Depends(jwt_bearer)
) -> str:
    """
    Get current authenticated user ID from JWT token.

    Args:
        user_id: User ID extracted by jwt_bearer dependency.

    Returns:
        str: Authenticated user's ID.

    Raises:
        HTTPException: 401 if not authenticated.
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user_id


def get_clock() -> Clock:
    """
    Server clock used for "today".

    Overridden in tests to pin the current instant.
    """
    return utc_now
