"""Tests for JWT session tokens."""

from datetime import timedelta
from uuid import uuid4

import jwt

from fitness_tracker.adapters.jwt_token_service import JwtTokenService
from fitness_tracker.domain.sessions import TokenStatus
from tests.conftest import TEST_JWT_SECRET, FixedClock

TTL = timedelta(days=7)


def test_issue_and_verify(token_service) -> None:
    user_id = uuid4()

    verification = token_service.verify(token_service.issue(user_id, TTL))

    assert verification.status is TokenStatus.VALID
    assert verification.user_id == user_id


def test_token_valid_until_expiry(token_service, clock) -> None:
    token = token_service.issue(uuid4(), TTL)

    clock.advance(TTL - timedelta(seconds=1))
    assert token_service.verify(token).status is TokenStatus.VALID

    clock.advance(timedelta(seconds=2))
    verification = token_service.verify(token)
    assert verification.status is TokenStatus.EXPIRED
    assert verification.user_id is None


def test_token_signed_with_other_secret_is_invalid(token_service, clock) -> None:
    other = JwtTokenService("another-secret-with-enough-length-for-hs256", clock)

    verification = token_service.verify(other.issue(uuid4(), TTL))

    assert verification.status is TokenStatus.INVALID


def test_tampered_token_is_invalid(token_service) -> None:
    token = token_service.issue(uuid4(), TTL)
    header, payload, signature = token.split(".")
    flipped = "A" if signature[0] != "A" else "B"

    verification = token_service.verify(f"{header}.{payload}.{flipped}{signature[1:]}")

    assert verification.status is TokenStatus.INVALID


def test_token_without_subject_is_invalid(token_service) -> None:
    token = jwt.encode({"exp": 9999999999}, TEST_JWT_SECRET, algorithm="HS256")

    assert token_service.verify(token).status is TokenStatus.INVALID


def test_token_with_non_uuid_subject_is_invalid(token_service) -> None:
    token = jwt.encode(
        {"sub": "42", "exp": 9999999999}, TEST_JWT_SECRET, algorithm="HS256"
    )

    assert token_service.verify(token).status is TokenStatus.INVALID


def test_garbage_is_invalid(token_service) -> None:
    assert token_service.verify("garbage").status is TokenStatus.INVALID


def test_expiry_uses_injected_clock() -> None:
    clock = FixedClock()
    service = JwtTokenService(TEST_JWT_SECRET, clock)
    token = service.issue(uuid4(), timedelta(minutes=1))

    clock.advance(timedelta(minutes=1))

    assert service.verify(token).status is TokenStatus.EXPIRED
