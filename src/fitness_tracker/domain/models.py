"""Domain models for users and their preferences."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ActivityLevel(StrEnum):
    """Self-reported daily activity."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Gender(StrEnum):
    """Genders supported by the metabolic formulas."""

    MALE = "male"
    FEMALE = "female"


class FitnessLevel(StrEnum):
    """Training experience used to pick workout templates."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    full_name: str
    email: str
    password_hash: str
    age: int | None = None
    gender: str | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    activity_level: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_active_at: datetime | None = None


@dataclass(frozen=True)
class UserProfile:
    """Public projection of a user, without credentials."""

    id: UUID
    full_name: str
    email: str
    age: int | None
    gender: str | None
    weight_kg: float | None
    height_cm: float | None
    activity_level: str | None
    avatar_url: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserProfile":
        """Strip the password hash from a stored user."""
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            age=user.age,
            gender=user.gender,
            weight_kg=user.weight_kg,
            height_cm=user.height_cm,
            activity_level=user.activity_level,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class UserPreferences:
    """Per-user mutable settings."""

    user_id: UUID
    fitness_level: str = FitnessLevel.BEGINNER.value
    daily_calorie_goal: int = 2000
    notifications_enabled: bool = True
    updated_at: datetime | None = None
