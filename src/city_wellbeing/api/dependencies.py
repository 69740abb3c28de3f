"""Request gates for the application API key and the user session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, Request

from city_wellbeing.domain.errors import AuthError, PersistenceError
from city_wellbeing.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from city_wellbeing.containers import AppContainer


def _get_client_api_key(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.client_api_key


async def require_api_key(
    x_app_api_key: str | None = Header(default=None),
    client_api_key: str = Depends(_get_client_api_key),
) -> None:
    """Ensure requests carry the application API key."""
    if not x_app_api_key or x_app_api_key != client_api_key:
        raise AuthError("Unauthorized: Invalid Application API Key")


def get_current_user_or_none(request: Request) -> UserRecord | None:
    """Return the session's user, if the session is authenticated."""
    container: AppContainer = request.app.state.container
    try:
        return container.identity_service.deserialize_session_user(request.session)
    except Exception as exc:
        raise PersistenceError(f"Failed to load session user: {exc}") from exc


async def require_user(
    user: UserRecord | None = Depends(get_current_user_or_none),
) -> UserRecord:
    """Ensure the request belongs to a logged-in user."""
    if user is None:
        raise AuthError(
            "Unauthorized: User must be logged in to access this resource."
        )
    return user
