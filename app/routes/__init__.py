"""GymPortal API - Routes Package."""

from app.routes import workout

__all__ = [
    "workout",
]
