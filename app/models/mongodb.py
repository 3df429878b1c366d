# app/models/mongodb.py
"""
GymPortal MongoDB Document Models.

Beanie ODM models for MongoDB.
"""

from beanie import Document
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List, Literal

from app.services.day_keys import utc_now, to_naive_utc


WorkoutCategory = Literal["strength", "cardio", "flexibility", "mixed"]


def _now() -> datetime:
    return to_naive_utc(utc_now())


class ExerciseEntry(BaseModel):
    """Single exercise inside a workout."""

    name: str = Field(..., min_length=1)
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=1)
    weight: float = Field(default=0, ge=0)
    duration: float = Field(default=0, ge=0)  # minutes
    notes: Optional[str] = None


class WorkoutDocument(Document):
    """
    Workout owned by one account.

    ``completions`` holds one UTC-midnight value per day the workout was
    performed. ``completed``/``completed_at`` are the legacy summary of the
    same fact, kept for older report consumers.
    """

    owner_id: str
    title: str
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    category: WorkoutCategory = "mixed"
    notes: Optional[str] = None
    total_duration: float = 0  # minutes, derived from exercises

    # Day the record was created; never rewritten
    logged_date: datetime = Field(default_factory=_now)

    # Completion tracking
    completions: List[datetime] = Field(default_factory=list)
    completed: bool = False
    completed_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    class Settings:
        name = "workouts"
        indexes = [
            "owner_id",
        ]

    def set_exercises(self, exercises: List[ExerciseEntry]) -> None:
        """Replace exercises and recompute total_duration."""
        self.exercises = list(exercises)
        self.total_duration = sum(e.duration for e in self.exercises)

    def touch(self) -> None:
        self.updated_at = _now()
