"""
GymPortal API - Authentication Middleware.

JWT verification for protected routes.
"""

from typing import Optional

from fastapi import Request, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.services.auth import verify_token


class JWTBearer(HTTPBearer):
    """
    JWT Bearer token authentication.

    Custom HTTPBearer that validates JWT tokens on protected routes and
    resolves to the caller's user id (the ``sub`` claim).
    """

    def __init__(self, auto_error: bool = True):
        super().__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> Optional[str]:
        """
        Verify JWT token from Authorization header.

        Returns:
            Optional[str]: User ID from token if valid.

        Raises:
            HTTPException: 403 if token is invalid or missing.
        """
        credentials: HTTPAuthorizationCredentials = await super().__call__(request)

        if not credentials:
            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Invalid authorization credentials"
                )
            return None

        if credentials.scheme.lower() != "bearer":
            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Invalid authentication scheme"
                )
            return None

        payload = verify_token(credentials.credentials)

        if not payload:
            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Invalid or expired token"
                )
            return None

        user_id = payload.get("sub")
        if not user_id:
            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Invalid token payload"
                )
            return None

        return str(user_id)


# Global JWT bearer instance for dependency injection
jwt_bearer = JWTBearer()
