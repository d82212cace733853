"""Tests for the user stats overview."""

from datetime import timedelta
from uuid import uuid4

from fitness_tracker.domain.stats import MealLifetimeTotals, WorkoutLifetimeTotals
from fitness_tracker.domain.workouts import CompletedWorkoutInput
from fitness_tracker.services.stats import UserStatsService
from tests.conftest import BANANA, CHICKEN, START


def test_overview_for_new_user(
    meal_repository, workout_repository, preference_service
) -> None:
    service = UserStatsService(meal_repository, workout_repository, preference_service)
    user_id = uuid4()

    overview = service.overview(user_id)

    assert overview.days_tracked == 0
    assert overview.total_meal_entries == 0
    assert overview.average_entry_calories == 0.0
    assert overview.total_workouts == 0
    assert overview.average_workout_minutes == 0.0
    assert overview.preferences.daily_calorie_goal == 2000


def test_overview_combines_both_ledgers(
    meal_ledger,
    workout_ledger,
    meal_repository,
    workout_repository,
    preference_service,
) -> None:
    service = UserStatsService(meal_repository, workout_repository, preference_service)
    user_id = uuid4()
    meal_ledger.add_meal(user_id, BANANA.id, 100)
    meal_ledger.add_meal(user_id, CHICKEN.id, 100)
    meal_ledger.add_meal(user_id, CHICKEN.id, 50, START.date() - timedelta(days=1))
    for minutes in (30, 45):
        workout_ledger.complete_workout(
            user_id,
            CompletedWorkoutInput(
                name="Run", workout_type="cardio", actual_minutes=minutes
            ),
        )
    meal_ledger.add_meal(uuid4(), BANANA.id, 1000)

    overview = service.overview(user_id)

    assert overview.days_tracked == 2
    assert overview.total_meal_entries == 3
    assert overview.average_entry_calories == 112.17
    assert overview.total_workouts == 2
    assert overview.total_workout_minutes == 75
    assert overview.average_workout_minutes == 37.5


def test_overview_uses_storage_rollups(
    meal_repository, workout_repository, preference_service, monkeypatch
) -> None:
    service = UserStatsService(meal_repository, workout_repository, preference_service)
    monkeypatch.setattr(
        meal_repository,
        "lifetime_totals",
        lambda user_id: MealLifetimeTotals(
            entry_count=1200, day_count=400, total_calories=240006.0
        ),
    )
    monkeypatch.setattr(
        workout_repository,
        "lifetime_totals",
        lambda user_id: WorkoutLifetimeTotals(workout_count=2, total_minutes=25),
    )

    overview = service.overview(uuid4())

    assert overview.total_meal_entries == 1200
    assert overview.days_tracked == 400
    assert overview.average_entry_calories == 200.01
    assert overview.total_workouts == 2
    assert overview.average_workout_minutes == 12.5


def test_overview_average_rounds_halves_up(
    meal_repository, workout_repository, preference_service, monkeypatch
) -> None:
    service = UserStatsService(meal_repository, workout_repository, preference_service)
    monkeypatch.setattr(
        meal_repository,
        "lifetime_totals",
        lambda user_id: MealLifetimeTotals(
            entry_count=2, day_count=1, total_calories=89.01
        ),
    )

    assert service.overview(uuid4()).average_entry_calories == 44.51
