"""GymPortal API - Pydantic Schemas Package."""

from app.schemas.workout import (
    ExerciseInput,
    WorkoutCreate,
    WorkoutUpdate,
    CompletionRequest,
    WorkoutResponse,
    WorkoutMutationResponse,
    UnmarkResponse,
    WorkoutListResponse,
    CalendarDay,
    MonthlyCalendarResponse,
    DayWorkoutsResponse,
    WorkoutStatsResponse,
)

__all__ = [
    "ExerciseInput",
    "WorkoutCreate",
    "WorkoutUpdate",
    "CompletionRequest",
    "WorkoutResponse",
    "WorkoutMutationResponse",
    "UnmarkResponse",
    "WorkoutListResponse",
    "CalendarDay",
    "MonthlyCalendarResponse",
    "DayWorkoutsResponse",
    "WorkoutStatsResponse",
]
