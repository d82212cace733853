"""Domain models for session tokens."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from fitness_tracker.domain.models import UserRecord


class TokenStatus(StrEnum):
    """Outcome of verifying a session token."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenVerification:
    """Tagged result of token verification."""

    status: TokenStatus
    user_id: UUID | None = None

    @classmethod
    def valid(cls, user_id: UUID) -> "TokenVerification":
        return cls(status=TokenStatus.VALID, user_id=user_id)

    @classmethod
    def expired(cls) -> "TokenVerification":
        return cls(status=TokenStatus.EXPIRED)

    @classmethod
    def invalid(cls) -> "TokenVerification":
        return cls(status=TokenStatus.INVALID)


@dataclass(frozen=True)
class AuthResult:
    """Authenticated user with a freshly issued bearer token."""

    user: UserRecord
    token: str
