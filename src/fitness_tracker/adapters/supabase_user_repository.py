"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_errors import storage_errors
from fitness_tracker.domain.errors import ConflictError, InternalError, NotFoundError
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.services.users import UserRepository

USER_COLUMNS = (
    "id, full_name, email, password_hash, age, gender, weight_kg, height_cm, "
    "activity_level, avatar_url, created_at, updated_at, last_active_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        with storage_errors("users.get_by_id"):
            response = (
                self.client.table("users")
                .select(USER_COLUMNS)
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with an exact email match, if present."""
        with storage_errors("users.get_by_email"):
            response = (
                self.client.table("users")
                .select(USER_COLUMNS)
                .eq("email", email)
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        try:
            with storage_errors("users.create_user"):
                response = (
                    self.client.table("users")
                    .insert(
                        {
                            "full_name": full_name,
                            "email": email,
                            "password_hash": password_hash,
                        }
                    )
                    .execute()
                )
        except ConflictError as exc:
            raise ConflictError("A user with this email already exists") from exc
        if not response.data:
            raise InternalError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply changes to a user row and return it."""
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in changes.items()
        }
        with storage_errors("users.update_user"):
            response = (
                self.client.table("users")
                .update(payload)
                .eq("id", str(user_id))
                .execute()
            )
        if not response.data:
            raise NotFoundError("User not found")
        return _parse_user(response.data[0])

    def touch_last_active(self, user_id: UUID, active_at: datetime) -> None:
        """Update the last_active_at timestamp for a user."""
        with storage_errors("users.touch_last_active"):
            self.client.table("users").update(
                {"last_active_at": active_at.isoformat()}
            ).eq("id", str(user_id)).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        full_name=str(row.get("full_name", "")),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash", "")),
        age=int(row["age"]) if row.get("age") is not None else None,
        gender=row.get("gender"),
        weight_kg=float(row["weight_kg"]) if row.get("weight_kg") is not None else None,
        height_cm=float(row["height_cm"]) if row.get("height_cm") is not None else None,
        activity_level=row.get("activity_level"),
        avatar_url=row.get("avatar_url"),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
        last_active_at=_parse_datetime(row.get("last_active_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
