"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import ClientOptions, create_client

from fitness_tracker.adapters.jwt_token_service import JwtTokenService
from fitness_tracker.adapters.passlib_password_hasher import PasslibPasswordHasher
from fitness_tracker.adapters.supabase_catalog_repository import (
    SupabaseFoodCatalogRepository,
    SupabaseWorkoutCatalogRepository,
)
from fitness_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from fitness_tracker.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from fitness_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_tracker.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from fitness_tracker.config import Settings, parse_timezone
from fitness_tracker.services.catalog import FoodCatalogService, WorkoutCatalogService
from fitness_tracker.services.clock import Clock, SystemClock
from fitness_tracker.services.meals import MealLedgerService
from fitness_tracker.services.preferences import PreferenceService
from fitness_tracker.services.stats import UserStatsService
from fitness_tracker.services.users import IdentityService
from fitness_tracker.services.workouts import WorkoutLedgerService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    identity_service: IdentityService
    preference_service: PreferenceService
    food_catalog_service: FoodCatalogService
    workout_catalog_service: WorkoutCatalogService
    meal_ledger_service: MealLedgerService
    workout_ledger_service: WorkoutLedgerService
    stats_service: UserStatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
        options=ClientOptions(
            postgrest_client_timeout=resolved_settings.storage_timeout_seconds
        ),
    )
    clock = SystemClock(parse_timezone(resolved_settings.timezone))

    user_repository = SupabaseUserRepository(supabase_client)
    preferences_repository = SupabasePreferencesRepository(supabase_client)
    food_repository = SupabaseFoodCatalogRepository(supabase_client)
    workout_catalog_repository = SupabaseWorkoutCatalogRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    workout_repository = SupabaseWorkoutRepository(supabase_client)

    preference_service = PreferenceService(preferences_repository)
    identity_service = IdentityService(
        repository=user_repository,
        password_hasher=PasslibPasswordHasher.create(
            resolved_settings.password_hash_rounds
        ),
        token_service=JwtTokenService(resolved_settings.jwt_secret, clock),
        preference_service=preference_service,
        clock=clock,
        session_ttl=timedelta(days=resolved_settings.session_ttl_days),
    )
    meal_ledger_service = MealLedgerService(
        food_repository=food_repository,
        repository=meal_repository,
        clock=clock,
    )
    workout_ledger_service = WorkoutLedgerService(workout_repository, clock)
    stats_service = UserStatsService(
        meal_repository=meal_repository,
        workout_repository=workout_repository,
        preference_service=preference_service,
    )

    async def close_resources() -> None:
        logger.info("Closing storage client")
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        identity_service=identity_service,
        preference_service=preference_service,
        food_catalog_service=FoodCatalogService(food_repository),
        workout_catalog_service=WorkoutCatalogService(workout_catalog_repository),
        meal_ledger_service=meal_ledger_service,
        workout_ledger_service=workout_ledger_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
