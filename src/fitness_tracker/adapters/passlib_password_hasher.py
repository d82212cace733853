"""Bcrypt password hashing backed by passlib."""

from dataclasses import dataclass

from passlib.context import CryptContext

from fitness_tracker.services.users import PasswordHasher

BCRYPT_MAX_BYTES = 72


@dataclass
class PasslibPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes with a configurable work factor."""

    context: CryptContext

    @classmethod
    def create(cls, rounds: int = 12) -> "PasslibPasswordHasher":
        """Create a hasher using bcrypt with the given cost."""
        return cls(
            CryptContext(
                schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
            )
        )

    def hash(self, raw_password: str) -> str:
        """Return a bcrypt digest for the password."""
        return self.context.hash(_truncate(raw_password))

    def verify(self, raw_password: str, digest: str) -> bool:
        """Return True when the password matches; malformed digests never match."""
        try:
            return self.context.verify(_truncate(raw_password), digest)
        except ValueError:
            return False


def _truncate(raw_password: str) -> bytes:
    # bcrypt only reads the first 72 bytes.
    return raw_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
