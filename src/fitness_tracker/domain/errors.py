"""Domain error taxonomy shared by services, adapters and the API layer."""


class DomainError(Exception):
    """Base class for errors raised by the domain layer."""

    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(DomainError):
    """Malformed, missing or out-of-range input."""

    message = "Invalid input"


class NotFoundError(DomainError):
    """Referenced entity is absent or not owned by the caller."""

    message = "Not found"


class ConflictError(DomainError):
    """Uniqueness violation, such as a duplicate email."""

    message = "Conflict"


class UnauthenticatedError(DomainError):
    """Missing, expired or invalid session."""

    message = "Not authenticated"


class InvalidCredentialsError(UnauthenticatedError):
    """Email and password do not match a known account."""

    message = "Invalid email or password"


class TransientError(DomainError):
    """Storage timeout or transient failure; the request may be retried."""

    message = "Service temporarily unavailable"


class InternalError(DomainError):
    """Unexpected failure. The message is never shown to callers."""

    message = "Internal server error"
