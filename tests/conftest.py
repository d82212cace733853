"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from fitness_tracker.adapters.jwt_token_service import JwtTokenService
from fitness_tracker.api.app import create_app
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import ConflictError, NotFoundError
from fitness_tracker.domain.meals import MealEntryRecord
from fitness_tracker.domain.models import UserPreferences, UserRecord
from fitness_tracker.domain.nutrition import FoodCategory, FoodItem, MacroProfile
from fitness_tracker.domain.stats import MealLifetimeTotals, WorkoutLifetimeTotals
from fitness_tracker.domain.workouts import (
    CompletedWorkoutEntry,
    CompletedWorkoutInput,
    WorkoutTemplate,
    WorkoutType,
)
from fitness_tracker.services.catalog import (
    FoodCatalogRepository,
    FoodCatalogService,
    WorkoutCatalogRepository,
    WorkoutCatalogService,
)
from fitness_tracker.services.clock import Clock
from fitness_tracker.services.meals import (
    MealLedgerService,
    MealRepository,
    to_meal_entry,
)
from fitness_tracker.services.preferences import (
    PreferenceService,
    PreferencesRepository,
)
from fitness_tracker.services.stats import UserStatsService
from fitness_tracker.services.users import (
    IdentityService,
    PasswordHasher,
    UserRepository,
)
from fitness_tracker.services.workouts import WorkoutLedgerService, WorkoutRepository

TEST_JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"
TEST_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0.c2lnbmF0dXJl"
)
START = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock frozen at a given instant until advanced."""

    current: datetime = START

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


@dataclass
class FakePasswordHasher(PasswordHasher):
    """Reversible hasher that counts verifications."""

    verifications: int = 0

    def hash(self, raw_password: str) -> str:
        return f"hashed:{raw_password}"

    def verify(self, raw_password: str, digest: str) -> bool:
        self.verifications += 1
        return digest == f"hashed:{raw_password}"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    touched: list[tuple[UUID, datetime]] = field(default_factory=list)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        if self.get_by_email(email) is not None:
            raise ConflictError("A user with this email already exists")
        user = UserRecord(
            id=uuid4(),
            full_name=full_name,
            email=email,
            password_hash=password_hash,
        )
        self.users[user.id] = user
        return user

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        if user_id not in self.users:
            raise NotFoundError("User not found")
        updated = replace(self.users[user_id], **changes)
        self.users[user_id] = updated
        return updated

    def touch_last_active(self, user_id: UUID, active_at: datetime) -> None:
        self.touched.append((user_id, active_at))
        if user_id in self.users:
            self.users[user_id] = replace(self.users[user_id], last_active_at=active_at)


@dataclass
class InMemoryPreferencesRepository(PreferencesRepository):
    """In-memory preferences repository for tests."""

    rows: dict[UUID, UserPreferences] = field(default_factory=dict)
    create_calls: int = 0

    def get(self, user_id: UUID) -> UserPreferences | None:
        return self.rows.get(user_id)

    def create(self, preferences: UserPreferences) -> UserPreferences:
        self.create_calls += 1
        return self.rows.setdefault(preferences.user_id, preferences)

    def update(self, user_id: UUID, changes: dict[str, object]) -> UserPreferences:
        if user_id not in self.rows:
            raise NotFoundError("Preferences not found")
        updated = replace(self.rows[user_id], **changes)
        self.rows[user_id] = updated
        return updated


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory food catalog for tests."""

    foods: dict[int, FoodItem] = field(default_factory=dict)
    categories: list[FoodCategory] = field(default_factory=list)
    search_limits: list[int] = field(default_factory=list)

    def get_food(self, food_id: int) -> FoodItem | None:
        return self.foods.get(food_id)

    def list_foods(self) -> list[FoodItem]:
        return sorted(self.foods.values(), key=lambda food: food.name)

    def search_foods(
        self, term: str, category_id: int | None, limit: int
    ) -> list[FoodItem]:
        self.search_limits.append(limit)
        matches = [
            food
            for food in self.list_foods()
            if term.lower() in food.name.lower()
            and (category_id is None or food.category_id == category_id)
        ]
        return matches[:limit]

    def list_categories(self) -> list[FoodCategory]:
        return sorted(self.categories, key=lambda category: category.name)


@dataclass
class InMemoryWorkoutCatalogRepository(WorkoutCatalogRepository):
    """In-memory workout catalog for tests."""

    types: list[WorkoutType] = field(default_factory=list)
    templates: list[WorkoutTemplate] = field(default_factory=list)

    def list_types(self) -> list[WorkoutType]:
        return sorted(self.types, key=lambda workout_type: workout_type.name)

    def list_templates(
        self, fitness_level: str | None, type_id: int | None, limit: int | None
    ) -> list[WorkoutTemplate]:
        matches = sorted(
            (
                template
                for template in self.templates
                if (fitness_level is None or template.fitness_level == fitness_level)
                and (type_id is None or template.type_id == type_id)
            ),
            key=lambda template: (template.fitness_level, template.name),
        )
        return matches if limit is None else matches[:limit]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository joined against an in-memory food catalog."""

    food_repository: InMemoryFoodCatalogRepository
    entries: dict[UUID, MealEntryRecord] = field(default_factory=dict)
    range_reads: list[tuple[date, date]] = field(default_factory=list)

    def create_entry(
        self,
        user_id: UUID,
        food_item_id: int,
        quantity_grams: float,
        meal_date: date,
        consumed_at: datetime,
    ) -> MealEntryRecord:
        record = MealEntryRecord(
            id=uuid4(),
            user_id=user_id,
            food=self.food_repository.foods[food_item_id],
            quantity_grams=quantity_grams,
            meal_date=meal_date,
            consumed_at=consumed_at,
        )
        self.entries[record.id] = record
        return record

    def get_entry(self, user_id: UUID, entry_id: UUID) -> MealEntryRecord | None:
        record = self.entries.get(entry_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    def update_quantity(
        self, user_id: UUID, entry_id: UUID, quantity_grams: float
    ) -> MealEntryRecord | None:
        record = self.get_entry(user_id, entry_id)
        if record is None:
            return None
        updated = replace(record, quantity_grams=quantity_grams)
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        if self.get_entry(user_id, entry_id) is None:
            return False
        del self.entries[entry_id]
        return True

    def delete_day(self, user_id: UUID, meal_date: date) -> int:
        doomed = [
            record.id
            for record in self.entries.values()
            if record.user_id == user_id and record.meal_date == meal_date
        ]
        for entry_id in doomed:
            del self.entries[entry_id]
        return len(doomed)

    def list_day(self, user_id: UUID, meal_date: date) -> list[MealEntryRecord]:
        return [
            record
            for record in self.entries.values()
            if record.user_id == user_id and record.meal_date == meal_date
        ]

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntryRecord]:
        self.range_reads.append((start, end))
        return [
            record
            for record in self.entries.values()
            if record.user_id == user_id and start <= record.meal_date <= end
        ]

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        dates = {
            record.meal_date
            for record in self.entries.values()
            if record.user_id == user_id
        }
        return sorted(dates, reverse=True)[:limit]

    def lifetime_totals(self, user_id: UUID) -> MealLifetimeTotals:
        entries = [
            to_meal_entry(record)
            for record in self.entries.values()
            if record.user_id == user_id
        ]
        return MealLifetimeTotals(
            entry_count=len(entries),
            day_count=len({entry.meal_date for entry in entries}),
            total_calories=sum(entry.totals.calories for entry in entries),
        )


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory completed workout repository for tests."""

    entries: dict[UUID, CompletedWorkoutEntry] = field(default_factory=dict)

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout: CompletedWorkoutInput,
        planned_minutes: int,
        intensity: str,
        workout_date: date,
        completed_at: datetime,
    ) -> CompletedWorkoutEntry:
        entry = CompletedWorkoutEntry(
            id=uuid4(),
            user_id=user_id,
            name=str(workout.name),
            workout_type=str(workout.workout_type),
            planned_minutes=planned_minutes,
            actual_minutes=int(workout.actual_minutes or 0),
            intensity=intensity,
            completed_at=completed_at,
            workout_date=workout_date,
            template_id=workout.template_id,
            notes=workout.notes,
        )
        self.entries[entry.id] = entry
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return False
        del self.entries[entry_id]
        return True

    def list_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[CompletedWorkoutEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and start <= entry.workout_date <= end
        ]

    def list_entries(
        self, user_id: UUID, workout_date: date | None, limit: int
    ) -> list[CompletedWorkoutEntry]:
        matches = sorted(
            (
                entry
                for entry in self.entries.values()
                if entry.user_id == user_id
                and (workout_date is None or entry.workout_date == workout_date)
            ),
            key=lambda entry: entry.completed_at,
            reverse=True,
        )
        return matches[:limit]

    def recent_dates(self, user_id: UUID, limit: int) -> list[date]:
        dates = {
            entry.workout_date
            for entry in self.entries.values()
            if entry.user_id == user_id
        }
        return sorted(dates, reverse=True)[:limit]

    def lifetime_totals(self, user_id: UUID) -> WorkoutLifetimeTotals:
        entries = [entry for entry in self.entries.values() if entry.user_id == user_id]
        return WorkoutLifetimeTotals(
            workout_count=len(entries),
            total_minutes=sum(entry.actual_minutes for entry in entries),
        )


def food(  # noqa: PLR0913
    food_id: int,
    name: str,
    calories: float,
    protein_g: float,
    fat_g: float,
    carbs_g: float,
    category_id: int | None = None,
    category_name: str | None = None,
) -> FoodItem:
    return FoodItem(
        id=food_id,
        name=name,
        macros=MacroProfile(calories, protein_g, fat_g, carbs_g),
        category_id=category_id,
        category_name=category_name,
    )


BANANA = food(1, "Banana", 89, 1.1, 0.3, 22.8, 1, "Fruits")
CHICKEN = food(2, "Chicken breast", 165, 31, 3.6, 0, 2, "Meat")
OATMEAL = food(3, "Oatmeal", 68, 2.4, 1.4, 12, 3, "Grains")
BANANA_BREAD = food(4, "Banana bread", 326, 4.3, 10.5, 54.6, 3, "Grains")


def workout_template(  # noqa: PLR0913
    template_id: int,
    name: str,
    fitness_level: str,
    type_id: int,
    duration_minutes: int = 30,
    intensity: str = "medium",
) -> WorkoutTemplate:
    return WorkoutTemplate(
        id=template_id,
        name=name,
        duration_minutes=duration_minutes,
        intensity=intensity,
        fitness_level=fitness_level,
        type_id=type_id,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SERVICE_KEY,
        jwt_secret=TEST_JWT_SECRET,
        password_hash_rounds=4,
        cookie_secure=False,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def token_service(clock: FixedClock) -> JwtTokenService:
    return JwtTokenService(TEST_JWT_SECRET, clock)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def preferences_repository() -> InMemoryPreferencesRepository:
    return InMemoryPreferencesRepository()


@pytest.fixture
def preference_service(
    preferences_repository: InMemoryPreferencesRepository,
) -> PreferenceService:
    return PreferenceService(preferences_repository)


@pytest.fixture
def identity_service(
    user_repository: InMemoryUserRepository,
    password_hasher: FakePasswordHasher,
    token_service: JwtTokenService,
    preference_service: PreferenceService,
    clock: FixedClock,
) -> IdentityService:
    return IdentityService(
        repository=user_repository,
        password_hasher=password_hasher,
        token_service=token_service,
        preference_service=preference_service,
        clock=clock,
    )


@pytest.fixture
def food_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository(
        foods={item.id: item for item in (BANANA, CHICKEN, OATMEAL, BANANA_BREAD)},
        categories=[
            FoodCategory(id=1, name="Fruits", product_count=1),
            FoodCategory(id=2, name="Meat", product_count=1),
            FoodCategory(id=3, name="Grains", product_count=2),
        ],
    )


@pytest.fixture
def workout_catalog_repository() -> InMemoryWorkoutCatalogRepository:
    return InMemoryWorkoutCatalogRepository(
        types=[
            WorkoutType(id=1, name="Cardio", template_count=3),
            WorkoutType(id=2, name="Strength", template_count=2),
        ],
        templates=[
            workout_template(1, "Brisk walk", "beginner", 1, 30, "light"),
            workout_template(2, "Interval run", "intermediate", 1, 25, "high"),
            workout_template(3, "Cycling", "beginner", 1, 45),
            workout_template(4, "Bodyweight circuit", "beginner", 2, 20),
            workout_template(5, "Barbell squat", "advanced", 2, 40, "high"),
        ],
    )


@pytest.fixture
def meal_repository(
    food_repository: InMemoryFoodCatalogRepository,
) -> InMemoryMealRepository:
    return InMemoryMealRepository(food_repository)


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def meal_ledger(
    food_repository: InMemoryFoodCatalogRepository,
    meal_repository: InMemoryMealRepository,
    clock: FixedClock,
) -> MealLedgerService:
    return MealLedgerService(
        food_repository=food_repository, repository=meal_repository, clock=clock
    )


@pytest.fixture
def workout_ledger(
    workout_repository: InMemoryWorkoutRepository, clock: FixedClock
) -> WorkoutLedgerService:
    return WorkoutLedgerService(workout_repository, clock)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    identity_service: IdentityService,
    preference_service: PreferenceService,
    food_repository: InMemoryFoodCatalogRepository,
    workout_catalog_repository: InMemoryWorkoutCatalogRepository,
    meal_repository: InMemoryMealRepository,
    workout_repository: InMemoryWorkoutRepository,
    meal_ledger: MealLedgerService,
    workout_ledger: WorkoutLedgerService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        identity_service=identity_service,
        preference_service=preference_service,
        food_catalog_service=FoodCatalogService(food_repository),
        workout_catalog_service=WorkoutCatalogService(workout_catalog_repository),
        meal_ledger_service=meal_ledger,
        workout_ledger_service=workout_ledger,
        stats_service=UserStatsService(
            meal_repository=meal_repository,
            workout_repository=workout_repository,
            preference_service=preference_service,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
