"""GymPortal API - Workout summary statistics."""

import math
from collections import Counter
from typing import Any, Dict, Iterable

from app.models.mongodb import WorkoutDocument
from app.services.completion_calendar import completion_days


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (32.5 -> 33)."""
    return int(math.floor(value + 0.5))


def summarize(workouts: Iterable[WorkoutDocument]) -> Dict[str, Any]:
    """
    Totals across an owner's workouts.

    Returns:
        Dict with total_workouts, total_duration, avg_duration (rounded
        half up), total_exercises, total_completions and category_breakdown.
    """
    workouts = list(workouts)
    total_duration = sum(w.total_duration for w in workouts)
    avg_duration = total_duration / len(workouts) if workouts else 0

    return {
        "total_workouts": len(workouts),
        "total_duration": total_duration,
        "avg_duration": round_half_up(avg_duration),
        "total_exercises": sum(len(w.exercises) for w in workouts),
        "total_completions": sum(len(completion_days(w)) for w in workouts),
        "category_breakdown": dict(Counter(w.category for w in workouts)),
    }
