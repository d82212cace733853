"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from fitness_tracker.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

TOKEN_COOKIE = "jwt"
BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def session_token(request: Request, authorization: str | None) -> str | None:
    """Read the session token from the cookie or an Authorization header."""
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


async def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserRecord:
    """Resolve the authenticated user or raise UnauthenticatedError."""
    container = get_container(request)
    return container.identity_service.validate_session(
        session_token(request, authorization)
    )
