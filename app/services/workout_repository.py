"""
GymPortal API - Workout Persistence.

Load/save helpers over the Beanie ``WorkoutDocument`` plus a per-workout
mutation lock. Every read-modify-write of a workout document runs under
``workout_lock`` so two requests in this process cannot overwrite each
other's changes with a stale full-document save.
"""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Tuple

from beanie import PydanticObjectId
from bson import ObjectId

from app.models.mongodb import WorkoutDocument
from app.utils.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


@asynccontextmanager
async def workout_lock(workout_id: str) -> AsyncIterator[None]:
    """Serialize mutations of one workout document."""
    lock = _locks.get(workout_id)
    if lock is None:
        lock = asyncio.Lock()
        _locks[workout_id] = lock
    async with lock:
        yield


async def get_workout(workout_id: str) -> WorkoutDocument:
    """
    Load a workout by id.

    Raises:
        NotFoundError: If the id is malformed or does not resolve.
    """
    if not ObjectId.is_valid(workout_id):
        raise NotFoundError("Workout not found")

    workout = await WorkoutDocument.get(PydanticObjectId(workout_id))
    if not workout:
        raise NotFoundError("Workout not found")
    return workout


async def get_owned_workout(workout_id: str, caller_id: str) -> WorkoutDocument:
    """
    Load a workout and check the caller owns it.

    Raises:
        NotFoundError: Unknown workout.
        ForbiddenError: Caller is not the owner.
    """
    workout = await get_workout(workout_id)
    if workout.owner_id != caller_id:
        logger.warning(f"User {caller_id} denied access to workout {workout_id}")
        raise ForbiddenError()
    return workout


async def list_owner_workouts(owner_id: str) -> List[WorkoutDocument]:
    """All workouts of an owner, oldest logged first."""
    return await WorkoutDocument.find(
        WorkoutDocument.owner_id == owner_id
    ).sort(+WorkoutDocument.logged_date).to_list()


async def page_owner_workouts(
    owner_id: str,
    page: int,
    limit: int
) -> Tuple[List[WorkoutDocument], int]:
    """
    One page of an owner's workouts, newest logged first.

    Returns:
        Tuple[List[WorkoutDocument], int]: (page items, total count)
    """
    total = await WorkoutDocument.find(WorkoutDocument.owner_id == owner_id).count()
    workouts = await WorkoutDocument.find(
        WorkoutDocument.owner_id == owner_id
    ).sort(-WorkoutDocument.logged_date).skip((page - 1) * limit).limit(limit).to_list()
    return workouts, total


async def save_workout(workout: WorkoutDocument) -> WorkoutDocument:
    workout.touch()
    await workout.save()
    return workout


async def delete_workout(workout: WorkoutDocument) -> None:
    await workout.delete()
