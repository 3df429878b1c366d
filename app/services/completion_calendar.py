"""
GymPortal API - Completion Calendar.

Derives per-day completion data for an owner's workouts on demand.
A workout's days are its ``completions`` plus the legacy ``completed_at``,
all normalized to UTC days and deduplicated, so a workout counts at most
once per day.
"""

from collections import Counter
from datetime import date
from typing import Iterable, List, Set, Tuple

from app.models.mongodb import WorkoutDocument
from app.services.day_keys import month_bounds, normalize
from app.services.workout_repository import list_owner_workouts


def completion_days(workout: WorkoutDocument) -> Set[date]:
    """Distinct UTC days on which the workout was completed."""
    days = {normalize(entry) for entry in workout.completions}
    if workout.completed_at is not None:
        days.add(normalize(workout.completed_at))
    return days


def monthly_entries(
    workouts: Iterable[WorkoutDocument],
    year: int,
    month: int
) -> List[Tuple[date, WorkoutDocument]]:
    """
    Every (day, workout) completion pair inside a month.

    Sorted by day, then by the workout's logged date.
    """
    start, end = month_bounds(year, month)
    entries = [
        (day, workout)
        for workout in workouts
        for day in completion_days(workout)
        if start <= day < end
    ]
    entries.sort(key=lambda pair: (pair[0], pair[1].logged_date))
    return entries


def monthly_counts(
    workouts: Iterable[WorkoutDocument],
    year: int,
    month: int
) -> List[Tuple[date, int]]:
    """Sparse (day, workout count) list for a month, ascending by day."""
    counts = Counter(day for day, _ in monthly_entries(workouts, year, month))
    return sorted(counts.items())


def workouts_on_day(workouts: Iterable[WorkoutDocument], day: date) -> List[WorkoutDocument]:
    """Workouts completed on ``day``, ordered by logged date."""
    matches = [w for w in workouts if day in completion_days(w)]
    return sorted(matches, key=lambda w: w.logged_date)


async def get_monthly_counts(owner_id: str, year: int, month: int) -> List[Tuple[date, int]]:
    workouts = await list_owner_workouts(owner_id)
    return monthly_counts(workouts, year, month)


async def get_monthly_entries(owner_id: str, year: int, month: int) -> List[Tuple[date, WorkoutDocument]]:
    workouts = await list_owner_workouts(owner_id)
    return monthly_entries(workouts, year, month)


async def get_workouts_on_day(owner_id: str, day: date) -> List[WorkoutDocument]:
    workouts = await list_owner_workouts(owner_id)
    return workouts_on_day(workouts, day)
