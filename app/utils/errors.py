"""
GymPortal API - Custom Exception Classes.

Exception hierarchy for application error handling.
"""

from typing import Optional


class GymPortalException(Exception):
    """
    Base exception class for GymPortal application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class NotFoundError(GymPortalException):
    """
    Exception raised when a resource is not found.

    Used when:
    - Workout id is malformed
    - Workout does not exist
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class ValidationError(GymPortalException):
    """
    Exception raised for input validation failures.

    Used when:
    - Invalid input format
    - Query values out of range
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class InvalidTimestampError(ValidationError):
    """Raised when a supplied timestamp cannot be parsed."""

    def __init__(
        self,
        message: str = "Invalid date format",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, detail=detail)


class NotTodayError(GymPortalException):
    """
    Raised when a completion undo targets a day other than today.

    Only the current day's completion may be retracted. This is a
    domain rule, not a fault, so it maps to 400.
    """

    def __init__(
        self,
        message: str = "Only today's completion can be undone",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class ForbiddenError(GymPortalException):
    """
    Exception raised for authorization failures.

    Used when:
    - Caller does not own the workout
    """

    def __init__(
        self,
        message: str = "Access denied",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=403,
            detail=detail
        )
