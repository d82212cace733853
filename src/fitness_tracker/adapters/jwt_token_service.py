"""HS256 session tokens backed by PyJWT."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from fitness_tracker.domain.sessions import TokenVerification
from fitness_tracker.services.clock import Clock
from fitness_tracker.services.users import TokenService

logger = logging.getLogger(__name__)

# Expiry is compared against the injected clock, not the library's wall clock.
_DECODE_OPTIONS = {
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": ["sub", "exp"],
}


@dataclass
class JwtTokenService(TokenService):
    """Signed stateless session tokens carrying a user id and expiry."""

    secret: str
    clock: Clock
    algorithm: str = "HS256"

    def issue(self, user_id: UUID, ttl: timedelta) -> str:
        """Return a signed token valid for the given TTL."""
        issued_at = self.clock.now()
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenVerification:
        """Check signature, shape and expiry of a token."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            return TokenVerification.invalid()

        try:
            user_id = UUID(str(claims["sub"]))
            expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        except (TypeError, ValueError, OverflowError):
            return TokenVerification.invalid()

        if self.clock.now() >= expires_at:
            return TokenVerification.expired()
        return TokenVerification.valid(user_id)
