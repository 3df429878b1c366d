# app/routes/workout.py
"""GymPortal API - Workout Routes (MongoDB)."""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies import Clock, get_clock, get_current_user_id
from app.models.mongodb import WorkoutDocument
from app.schemas.workout import (
    CalendarDay,
    CompletionRequest,
    DayWorkoutsResponse,
    MonthlyCalendarResponse,
    UnmarkResponse,
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutMutationResponse,
    WorkoutResponse,
    WorkoutStatsResponse,
    WorkoutUpdate,
)
from app.services import completions
from app.services.completion_calendar import (
    get_monthly_counts,
    get_monthly_entries,
    get_workouts_on_day,
)
from app.services.day_keys import month_bounds, normalize, parse_day
from app.services.history_report import render_monthly_report
from app.services.workout_repository import (
    delete_workout,
    get_owned_workout,
    list_owner_workouts,
    page_owner_workouts,
    save_workout,
    workout_lock,
)
from app.services.workout_stats import summarize
from app.utils.errors import GymPortalException
from settings import settings

logger = logging.getLogger(__name__)
router = APIRouter()


def to_response(workout: WorkoutDocument) -> WorkoutResponse:
    return WorkoutResponse(
        id=str(workout.id),
        owner_id=workout.owner_id,
        title=workout.title,
        exercises=workout.exercises,
        category=workout.category,
        notes=workout.notes,
        total_duration=workout.total_duration,
        logged_date=workout.logged_date,
        completions=[normalize(entry) for entry in workout.completions],
        completed=workout.completed,
        completed_at=normalize(workout.completed_at) if workout.completed_at is not None else None,
        created_at=workout.created_at,
        updated_at=workout.updated_at,
    )


def _resolve_month(year: Optional[int], month: Optional[int], clock: Clock):
    now = clock()
    year = year or now.year
    month = month or now.month
    month_bounds(year, month)  # validates
    return year, month


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id)
):
    """Get the caller's workouts, newest first."""
    limit = limit or settings.WORKOUTS_PAGE_SIZE
    workouts, total = await page_owner_workouts(user_id, page, limit)

    return WorkoutListResponse(
        workouts=[to_response(w) for w in workouts],
        total_pages=math.ceil(total / limit),
        current_page=page,
        total=total
    )


@router.post("", response_model=WorkoutMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
    request: WorkoutCreate,
    user_id: str = Depends(get_current_user_id)
):
    """Log a new workout."""
    try:
        workout = WorkoutDocument(
            owner_id=user_id,
            title=request.title,
            category=request.category,
            notes=request.notes
        )
        workout.set_exercises([e.to_entry() for e in request.exercises])
        await workout.insert()
    except Exception as e:
        logger.error(f"Create workout failed: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"Workout {workout.id} created by {user_id}")
    return WorkoutMutationResponse(
        message="Workout created successfully",
        workout=to_response(workout)
    )


@router.get("/stats/summary", response_model=WorkoutStatsResponse)
async def get_stats(user_id: str = Depends(get_current_user_id)):
    """Totals across the caller's workouts."""
    workouts = await list_owner_workouts(user_id)
    return WorkoutStatsResponse(**summarize(workouts))


@router.get("/calendar", response_model=MonthlyCalendarResponse)
async def get_monthly_calendar(
    year: Optional[int] = Query(None, ge=1, le=9998),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_id: str = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock)
):
    """
    Per-day completion counts for a month (default: current month).

    Days without completions are omitted.
    """
    year, month = _resolve_month(year, month, clock)
    counts = await get_monthly_counts(user_id, year, month)

    return MonthlyCalendarResponse(
        year=year,
        month=month,
        days=[CalendarDay(day=day, count=count) for day, count in counts]
    )


@router.get("/calendar/day", response_model=DayWorkoutsResponse)
async def get_day_workouts(
    date: str = Query(..., description="Day as YYYY-MM-DD"),
    user_id: str = Depends(get_current_user_id)
):
    """Workouts completed on one day."""
    day = parse_day(date)
    workouts = await get_workouts_on_day(user_id, day)

    return DayWorkoutsResponse(
        day=day,
        workouts=[to_response(w) for w in workouts]
    )


@router.get("/report")
async def get_monthly_report(
    year: Optional[int] = Query(None, ge=1, le=9998),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_id: str = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock)
):
    """Download a month's completed workouts as a PDF table."""
    year, month = _resolve_month(year, month, clock)
    entries = await get_monthly_entries(user_id, year, month)
    content = render_monthly_report(entries, year, month, title=settings.REPORT_TITLE)

    filename = f"workout-history-{year:04d}-{month:02d}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Get one workout."""
    workout = await get_owned_workout(workout_id, user_id)
    return to_response(workout)


@router.put("/{workout_id}", response_model=WorkoutMutationResponse)
async def update_workout(
    workout_id: str,
    request: WorkoutUpdate,
    user_id: str = Depends(get_current_user_id)
):
    """Edit title, exercises, category or notes."""
    try:
        async with workout_lock(workout_id):
            workout = await get_owned_workout(workout_id, user_id)

            if request.title is not None:
                workout.title = request.title
            if request.exercises is not None:
                workout.set_exercises([e.to_entry() for e in request.exercises])
            if request.category is not None:
                workout.category = request.category
            if request.notes is not None:
                workout.notes = request.notes

            await save_workout(workout)
    except GymPortalException:
        raise
    except Exception as e:
        logger.error(f"Update workout {workout_id} failed: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    return WorkoutMutationResponse(
        message="Workout updated successfully",
        workout=to_response(workout)
    )


@router.delete("/{workout_id}")
async def remove_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Delete a workout."""
    try:
        async with workout_lock(workout_id):
            workout = await get_owned_workout(workout_id, user_id)
            await delete_workout(workout)
    except GymPortalException:
        raise
    except Exception as e:
        logger.error(f"Delete workout {workout_id} failed: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"Workout {workout_id} deleted by {user_id}")
    return {"message": "Workout deleted successfully"}


@router.post("/{workout_id}/complete", response_model=WorkoutMutationResponse)
async def mark_workout_completed(
    workout_id: str,
    request: Optional[CompletionRequest] = None,
    user_id: str = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock)
):
    """
    Mark a workout as done on a day (default: today, UTC).

    Past and future days are accepted. Repeating a day adds nothing.
    """
    timestamp = request.date if request else None
    try:
        workout = await completions.mark_completed(workout_id, user_id, timestamp, clock())
    except GymPortalException:
        raise
    except Exception as e:
        logger.error(f"Mark completed failed for workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    return WorkoutMutationResponse(
        message="Workout marked as completed",
        workout=to_response(workout)
    )


@router.delete("/{workout_id}/complete", response_model=UnmarkResponse)
async def unmark_workout_completed(
    workout_id: str,
    date: Optional[str] = Query(
        None,
        description=(
            "Day to undo; must be today. Prefer YYYY-MM-DD; "
            "URL-encode a positive offset as %2B (e.g. 2024-03-05T10:00:00%2B02:00)"
        )
    ),
    user_id: str = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock)
):
    """Undo today's completion of a workout."""
    try:
        workout, changed = await completions.unmark_completed(workout_id, user_id, date, clock())
    except GymPortalException:
        raise
    except Exception as e:
        logger.error(f"Unmark failed for workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    if changed:
        message = "Workout completion for today removed"
    else:
        message = "Workout was not marked as completed today"

    return UnmarkResponse(
        message=message,
        changed=changed,
        workout=to_response(workout)
    )
