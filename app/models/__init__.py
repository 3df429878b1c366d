"""
GymPortal API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from app.models.mongodb import (
    ExerciseEntry,
    WorkoutDocument,
)

__all__ = [
    "ExerciseEntry",
    "WorkoutDocument",
]
