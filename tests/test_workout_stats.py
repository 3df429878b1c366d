from datetime import datetime

from app.services.workout_stats import round_half_up, summarize


def test_round_half_up():
    assert round_half_up(32.5) == 33
    assert round_half_up(2.5) == 3
    assert round_half_up(32.49) == 32
    assert round_half_up(0) == 0


async def test_summary_average_of_exact_half(make_workout):
    a = await make_workout(durations=(20, 15), completions=[datetime(2024, 3, 1), datetime(2024, 3, 2)])
    b = await make_workout(durations=(30,), category="cardio")

    summary = summarize([a, b])

    assert summary["total_duration"] == 65
    assert summary["avg_duration"] == 33
    assert summary["total_completions"] == 2
    assert summary["category_breakdown"] == {"mixed": 1, "cardio": 1}


def test_summary_of_no_workouts():
    summary = summarize([])

    assert summary["total_workouts"] == 0
    assert summary["avg_duration"] == 0
    assert summary["category_breakdown"] == {}
