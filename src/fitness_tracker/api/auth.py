"""Account and session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response, status

from fitness_tracker.api.dependencies import TOKEN_COOKIE, current_user, get_container
from fitness_tracker.api.schemas import (  # noqa: TC001
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
)
from fitness_tracker.domain.models import UserProfile, UserRecord

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer
    from fitness_tracker.domain.sessions import AuthResult

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(
    response: Response, container: AppContainer, result: AuthResult
) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        result.token,
        max_age=int(container.identity_service.session_ttl.total_seconds()),
        httponly=True,
        samesite="strict",
        secure=container.settings.cookie_secure,
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest, request: Request, response: Response
) -> dict[str, object]:
    """Create an account and open a session."""
    container = get_container(request)
    result = container.identity_service.register(
        body.full_name, body.email, body.password
    )
    _set_session_cookie(response, container, result)
    return {
        "message": "User created successfully",
        "user": UserProfile.from_record(result.user),
        "token": result.token,
    }


@router.post("/login")
def login(
    body: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Verify credentials and open a session."""
    container = get_container(request)
    result = container.identity_service.authenticate(body.email, body.password)
    _set_session_cookie(response, container, result)
    return {
        "message": "Logged in successfully",
        "user": UserProfile.from_record(result.user),
        "token": result.token,
    }


@router.post("/logout")
async def logout(response: Response) -> dict[str, object]:
    """Clear the session cookie. Tokens are stateless and simply expire."""
    response.delete_cookie(TOKEN_COOKIE)
    return {"message": "Logged out successfully"}


@router.get("/check")
async def check(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the freshly loaded profile of the session's user."""
    container = get_container(request)
    profile = container.identity_service.get_profile(user.id)
    return {"user": UserProfile.from_record(profile)}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Update whitelisted profile fields."""
    container = get_container(request)
    updated = container.identity_service.update_profile(
        user, body.model_dump(exclude_unset=True)
    )
    return {
        "message": "Profile updated successfully",
        "user": UserProfile.from_record(updated),
    }


@router.get("/stats")
async def stats(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return lifetime meal and workout statistics."""
    container = get_container(request)
    return {"stats": container.stats_service.overview(user.id)}


@router.get("/recommended-calories")
async def recommended_calories(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the daily calorie recommendation, or null when the profile is incomplete."""
    container = get_container(request)
    return {
        "recommended_calories": container.identity_service.recommended_calories(user)
    }
