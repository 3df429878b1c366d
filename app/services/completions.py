"""
GymPortal API - Workout Completion Tracking.

Marks a workout as performed on a calendar day and undoes today's mark.

``completions`` holds at most one entry per UTC day. The legacy pair
``completed``/``completed_at`` is kept in step on every mutation:
marking always sets the flag and overwrites ``completed_at`` with the
marked day, even when that day was already present. Any day may be
marked; only the current day may be unmarked.
"""

import logging
from datetime import date, datetime
from typing import Optional, Tuple

from app.models.mongodb import WorkoutDocument
from app.services.day_keys import normalize, parse_timestamp, same_day, to_storage
from app.services.workout_repository import get_owned_workout, save_workout, workout_lock
from app.utils.errors import NotTodayError

logger = logging.getLogger(__name__)


def resolve_day(timestamp: Optional[str], now: datetime) -> date:
    """
    Day-key for a request: the supplied timestamp, else today.

    Raises:
        InvalidTimestampError: If the supplied timestamp is unparseable.
    """
    parsed = parse_timestamp(timestamp)
    return normalize(parsed if parsed is not None else now)


def apply_mark(workout: WorkoutDocument, day: date) -> bool:
    """
    Record ``day`` as a completion.

    Returns:
        bool: True if a new day was appended.
    """
    added = False
    if not any(same_day(entry, day) for entry in workout.completions):
        workout.completions.append(to_storage(day))
        added = True

    workout.completed = True
    workout.completed_at = to_storage(day)
    return added


def apply_unmark(workout: WorkoutDocument, day: date, today: date) -> bool:
    """
    Remove ``day`` from the completions.

    Raises:
        NotTodayError: If ``day`` is not today. Nothing is mutated.

    Returns:
        bool: True if any entry was removed.
    """
    if day != today:
        raise NotTodayError()

    kept = [entry for entry in workout.completions if not same_day(entry, day)]
    removed = len(kept) != len(workout.completions)
    workout.completions = kept

    if workout.completed_at is not None and same_day(workout.completed_at, day):
        workout.completed_at = None

    # The flag survives if completed_at still points at another day
    if not workout.completions and workout.completed_at is None:
        workout.completed = False

    return removed


async def mark_completed(
    workout_id: str,
    caller_id: str,
    timestamp: Optional[str],
    now: datetime
) -> WorkoutDocument:
    """
    Mark a workout as done on a day (default: today).

    Raises:
        InvalidTimestampError: Unparseable timestamp; storage untouched.
        NotFoundError: Unknown workout.
        ForbiddenError: Caller is not the owner.
    """
    day = resolve_day(timestamp, now)

    async with workout_lock(workout_id):
        workout = await get_owned_workout(workout_id, caller_id)
        added = apply_mark(workout, day)
        await save_workout(workout)

    logger.info(
        f"Workout {workout_id} marked completed on {day.isoformat()}"
        f"{'' if added else ' (already recorded)'}"
    )
    return workout


async def unmark_completed(
    workout_id: str,
    caller_id: str,
    timestamp: Optional[str],
    now: datetime
) -> Tuple[WorkoutDocument, bool]:
    """
    Undo today's completion of a workout.

    Returns:
        Tuple[WorkoutDocument, bool]: Updated workout and whether a day was removed.

    Raises:
        InvalidTimestampError: Unparseable timestamp; storage untouched.
        NotTodayError: Requested day is not today; storage untouched.
        NotFoundError: Unknown workout.
        ForbiddenError: Caller is not the owner.
    """
    day = resolve_day(timestamp, now)
    current_day = normalize(now)

    async with workout_lock(workout_id):
        workout = await get_owned_workout(workout_id, caller_id)
        changed = apply_unmark(workout, day, current_day)
        await save_workout(workout)

    logger.info(f"Workout {workout_id} completion for {day.isoformat()} undone (changed={changed})")
    return workout, changed
