"""Identity, credential and session business logic."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from fitness_tracker.domain.metabolism import recommended_calories
from fitness_tracker.domain.models import ActivityLevel, Gender, UserRecord
from fitness_tracker.domain.sessions import AuthResult, TokenStatus, TokenVerification
from fitness_tracker.services.clock import Clock
from fitness_tracker.services.preferences import PreferenceService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
SESSION_TTL = timedelta(days=7)
PROFILE_FIELDS = (
    "full_name",
    "age",
    "gender",
    "weight_kg",
    "height_cm",
    "activity_level",
    "avatar_url",
)
GENDERS = {gender.value for gender in Gender}
ACTIVITY_LEVELS = {level.value for level in ActivityLevel}


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with an exact email match, if present."""

    def create_user(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record.

        Raises ConflictError when the email is already taken.
        """

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply changes and return the updated user."""

    def touch_last_active(self, user_id: UUID, active_at: datetime) -> None:
        """Update the last active timestamp for the user."""


class PasswordHasher(Protocol):
    """Slow salted one-way password hash."""

    def hash(self, raw_password: str) -> str:
        """Return a digest for the password."""

    def verify(self, raw_password: str, digest: str) -> bool:
        """Return True when the password matches the digest."""


class TokenService(Protocol):
    """Signed, stateless session token primitive."""

    def issue(self, user_id: UUID, ttl: timedelta) -> str:
        """Return an opaque bearer token embedding its expiry."""

    def verify(self, token: str) -> TokenVerification:
        """Return the verification outcome for a token."""


@dataclass
class IdentityService:
    """Application service for accounts and sessions."""

    repository: UserRepository
    password_hasher: PasswordHasher
    token_service: TokenService
    preference_service: PreferenceService
    clock: Clock
    session_ttl: timedelta = SESSION_TTL
    _dummy_digest: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._dummy_digest = self.password_hasher.hash("not-a-real-password")

    def register(self, full_name: str, email: str, raw_password: str) -> AuthResult:
        """Create an account with default preferences and open a session."""
        if not full_name or not full_name.strip() or not email or not raw_password:
            raise ValidationError("Full name, email and password are required")
        if len(raw_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if self.repository.get_by_email(email) is not None:
            raise ConflictError("A user with this email already exists")

        digest = self.password_hasher.hash(raw_password)
        user = self.repository.create_user(full_name.strip(), email, digest)
        self.preference_service.get(user.id)
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, token=self._issue(user.id))

    def authenticate(self, email: str, raw_password: str) -> AuthResult:
        """Verify credentials and open a session."""
        if not email or not raw_password:
            raise ValidationError("Email and password are required")
        user = self.repository.get_by_email(email)
        if user is None:
            # Keep the unknown-email path as slow as a wrong password.
            self.password_hasher.verify(raw_password, self._dummy_digest)
            raise InvalidCredentialsError()
        if not self.password_hasher.verify(raw_password, user.password_hash):
            raise InvalidCredentialsError()

        self.repository.touch_last_active(user.id, self.clock.now())
        return AuthResult(user=user, token=self._issue(user.id))

    def validate_session(self, token: str | None) -> UserRecord:
        """Resolve a bearer token to its user."""
        if not token:
            raise UnauthenticatedError("Token not provided")
        verification = self.token_service.verify(token)
        if verification.status is not TokenStatus.VALID or verification.user_id is None:
            logger.info("Rejected session token: %s", verification.status)
            raise UnauthenticatedError("Invalid or expired token")
        user = self.repository.get_by_id(verification.user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, user_id: UUID) -> UserRecord:
        """Return the current stored user."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user: UserRecord, fields: dict[str, object]) -> UserRecord:
        """Update whitelisted profile fields; credentials are never touched."""
        changes = _validate_profile_changes(fields)
        changes["updated_at"] = self.clock.now()
        return self.repository.update_user(user.id, changes)

    def recommended_calories(self, user: UserRecord) -> int | None:
        """Return the daily calorie recommendation, or None if incomplete."""
        return recommended_calories(user)

    def _issue(self, user_id: UUID) -> str:
        return self.token_service.issue(user_id, self.session_ttl)


def _validate_profile_changes(fields: dict[str, object]) -> dict[str, object]:
    changes = {key: fields[key] for key in PROFILE_FIELDS if key in fields}
    if not changes:
        raise ValidationError("No profile fields to update")

    if "full_name" in changes:
        name = changes["full_name"]
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("full_name cannot be empty")
        changes["full_name"] = name.strip()
    if "age" in changes:
        changes["age"] = _positive_number(changes["age"], "age", integer=True)
    for key in ("weight_kg", "height_cm"):
        if key in changes:
            changes[key] = _positive_number(changes[key], key)
    if changes.get("gender") is not None and changes["gender"] not in GENDERS:
        raise ValidationError(f"gender must be one of {', '.join(sorted(GENDERS))}")
    if (
        changes.get("activity_level") is not None
        and changes["activity_level"] not in ACTIVITY_LEVELS
    ):
        raise ValidationError(
            f"activity_level must be one of {', '.join(sorted(ACTIVITY_LEVELS))}"
        )
    return changes


def _positive_number(
    value: object, name: str, integer: bool = False
) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValidationError(f"{name} must be a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a number") from exc
    if number <= 0:
        raise ValidationError(f"{name} must be positive")
    return int(number) if integer else number
