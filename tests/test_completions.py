import asyncio
from datetime import date, datetime

import pytest

from app.models.mongodb import WorkoutDocument
from app.services.completions import (
    apply_mark,
    apply_unmark,
    mark_completed,
    resolve_day,
    unmark_completed,
)
from app.utils.errors import (
    ForbiddenError,
    InvalidTimestampError,
    NotFoundError,
    NotTodayError,
)

MARCH_4 = date(2024, 3, 4)
MARCH_5 = date(2024, 3, 5)


def test_resolve_day_defaults_to_server_today(now):
    assert resolve_day(None, now) == MARCH_5
    assert resolve_day("2024-01-31", now) == date(2024, 1, 31)


async def test_apply_mark_is_idempotent_on_completions(make_workout):
    workout = await make_workout()

    assert apply_mark(workout, MARCH_5) is True
    assert apply_mark(workout, MARCH_5) is False

    assert workout.completions == [datetime(2024, 3, 5)]
    assert workout.completed is True
    assert workout.completed_at == datetime(2024, 3, 5)


async def test_apply_mark_overwrites_legacy_timestamp_every_call(make_workout):
    workout = await make_workout()

    apply_mark(workout, MARCH_5)
    apply_mark(workout, MARCH_4)
    apply_mark(workout, MARCH_5)

    assert workout.completions == [datetime(2024, 3, 5), datetime(2024, 3, 4)]
    assert workout.completed_at == datetime(2024, 3, 5)


async def test_apply_mark_matches_existing_entry_by_day(make_workout):
    workout = await make_workout(completions=[datetime(2024, 3, 5, 17, 30)])

    assert apply_mark(workout, MARCH_5) is False
    assert len(workout.completions) == 1


async def test_apply_unmark_rejects_other_days_without_mutation(make_workout):
    workout = await make_workout()
    apply_mark(workout, MARCH_4)
    before = (list(workout.completions), workout.completed, workout.completed_at)

    with pytest.raises(NotTodayError):
        apply_unmark(workout, MARCH_4, today=MARCH_5)

    assert (workout.completions, workout.completed, workout.completed_at) == before


async def test_mark_then_unmark_today_round_trips(make_workout):
    workout = await make_workout()
    apply_mark(workout, MARCH_4)
    prior = list(workout.completions)

    apply_mark(workout, MARCH_5)
    assert apply_unmark(workout, MARCH_5, today=MARCH_5) is True

    assert workout.completions == prior
    assert workout.completed_at is None
    # Flag remains while other completions exist
    assert workout.completed is True


async def test_unmark_clears_flag_when_nothing_left(make_workout):
    workout = await make_workout()
    apply_mark(workout, MARCH_5)

    assert apply_unmark(workout, MARCH_5, today=MARCH_5) is True
    assert workout.completions == []
    assert workout.completed is False
    assert workout.completed_at is None


async def test_unmark_keeps_flag_when_legacy_points_elsewhere(make_workout):
    workout = await make_workout(
        completions=[datetime(2024, 3, 5)],
        completed=True,
        completed_at=datetime(2024, 2, 10),
    )

    apply_unmark(workout, MARCH_5, today=MARCH_5)

    assert workout.completions == []
    assert workout.completed_at == datetime(2024, 2, 10)
    assert workout.completed is True


async def test_unmark_absent_day_is_a_noop(make_workout):
    workout = await make_workout()

    assert apply_unmark(workout, MARCH_5, today=MARCH_5) is False
    assert workout.completed is False


async def test_mark_completed_persists_scenario(make_workout, now):
    workout = await make_workout()
    workout_id = str(workout.id)

    await mark_completed(workout_id, "alice", None, now)
    await mark_completed(workout_id, "alice", None, now)

    stored = await WorkoutDocument.get(workout.id)
    assert stored.completions == [datetime(2024, 3, 5)]
    assert stored.completed is True
    assert stored.completed_at == datetime(2024, 3, 5)

    with pytest.raises(NotTodayError):
        await unmark_completed(workout_id, "alice", "2024-03-04", now)

    stored = await WorkoutDocument.get(workout.id)
    assert stored.completions == [datetime(2024, 3, 5)]

    stored, changed = await unmark_completed(workout_id, "alice", "2024-03-05", now)
    assert changed is True

    stored = await WorkoutDocument.get(workout.id)
    assert stored.completions == []
    assert stored.completed is False
    assert stored.completed_at is None


async def test_mark_completed_accepts_future_days(make_workout, now):
    workout = await make_workout()

    updated = await mark_completed(str(workout.id), "alice", "2024-04-20", now)

    assert updated.completions == [datetime(2024, 4, 20)]


async def test_mark_completed_requires_owner(make_workout, now):
    workout = await make_workout(owner_id="alice")

    with pytest.raises(ForbiddenError):
        await mark_completed(str(workout.id), "bob", None, now)

    stored = await WorkoutDocument.get(workout.id)
    assert stored.completions == []


async def test_unknown_or_malformed_workout_id(now):
    with pytest.raises(NotFoundError):
        await mark_completed("65f0a1b2c3d4e5f601234567", "alice", None, now)
    with pytest.raises(NotFoundError):
        await unmark_completed("not-an-id", "alice", None, now)


async def test_invalid_timestamp_leaves_store_untouched(make_workout, now):
    workout = await make_workout()

    with pytest.raises(InvalidTimestampError):
        await mark_completed(str(workout.id), "alice", "5th of March", now)

    stored = await WorkoutDocument.get(workout.id)
    assert stored.completions == []
    assert stored.completed is False


async def test_concurrent_marks_on_one_workout_are_not_lost(make_workout, now):
    workout = await make_workout()
    workout_id = str(workout.id)
    days = ["2024-03-01", "2024-03-02", "2024-03-03", "2024-03-04"]

    await asyncio.gather(*(mark_completed(workout_id, "alice", d, now) for d in days))

    stored = await WorkoutDocument.get(workout.id)
    assert sorted(stored.completions) == [datetime(2024, 3, d) for d in (1, 2, 3, 4)]
