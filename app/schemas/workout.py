"""
GymPortal API - Workout Schemas.

Pydantic schemas for workout logging and completion tracking.
"""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.mongodb import ExerciseEntry, WorkoutCategory


class ExerciseInput(BaseModel):
    """Exercise as submitted by the client."""

    name: str = Field(..., description="Exercise name")
    sets: int = Field(..., ge=1, description="Sets (>= 1)")
    reps: int = Field(..., ge=1, description="Reps per set (>= 1)")
    weight: float = Field(default=0, ge=0, description="Weight used")
    duration: float = Field(default=0, ge=0, description="Duration in minutes")
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Exercise name is required")
        return value

    def to_entry(self) -> ExerciseEntry:
        return ExerciseEntry(**self.model_dump())


class WorkoutCreate(BaseModel):
    """
    Schema for logging a new workout.

    total_duration is not accepted: it is always the sum of exercise durations.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Leg Day",
                "category": "strength",
                "exercises": [
                    {"name": "Squat", "sets": 5, "reps": 5, "weight": 100, "duration": 20},
                    {"name": "Lunge", "sets": 3, "reps": 12, "weight": 20, "duration": 15}
                ],
                "notes": "Felt strong"
            }
        }
    )

    title: str = Field(..., description="Workout title")
    exercises: List[ExerciseInput] = Field(..., min_length=1, description="At least one exercise")
    category: WorkoutCategory = "mixed"
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


class WorkoutUpdate(BaseModel):
    """Partial edit of a workout's descriptive fields."""

    title: Optional[str] = None
    exercises: Optional[List[ExerciseInput]] = Field(None, min_length=1)
    category: Optional[WorkoutCategory] = None
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be empty")
        return value


class CompletionRequest(BaseModel):
    """Optional day to mark; omitted means today (server clock, UTC)."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"date": "2024-03-05"}}
    )

    date: Optional[str] = Field(
        None,
        description="ISO-8601 date or datetime; a date-only value names the day directly (preferred)"
    )


class WorkoutResponse(BaseModel):
    """Workout as returned to clients."""

    id: str
    owner_id: str
    title: str
    exercises: List[ExerciseEntry]
    category: str
    notes: Optional[str] = None
    total_duration: float
    logged_date: datetime
    completions: List[date]
    completed: bool
    completed_at: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class WorkoutMutationResponse(BaseModel):
    message: str
    workout: WorkoutResponse


class UnmarkResponse(BaseModel):
    message: str
    changed: bool
    workout: WorkoutResponse


class WorkoutListResponse(BaseModel):
    workouts: List[WorkoutResponse]
    total_pages: int
    current_page: int
    total: int


class CalendarDay(BaseModel):
    day: date
    count: int


class MonthlyCalendarResponse(BaseModel):
    """Sparse per-day completion counts for one month."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "year": 2024,
                "month": 3,
                "days": [{"day": "2024-03-05", "count": 1}]
            }
        }
    )

    year: int
    month: int
    days: List[CalendarDay]


class DayWorkoutsResponse(BaseModel):
    day: date
    workouts: List[WorkoutResponse]


class WorkoutStatsResponse(BaseModel):
    total_workouts: int
    total_duration: float
    avg_duration: int
    total_exercises: int
    total_completions: int
    category_breakdown: Dict[str, int]
