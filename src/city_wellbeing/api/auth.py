"""Google login, logout and current-user endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from city_wellbeing.api.dependencies import get_current_user_or_none
from city_wellbeing.domain.errors import AuthError
from city_wellbeing.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from city_wellbeing.containers import AppContainer

router = APIRouter(tags=["auth"])

_logger = logging.getLogger(__name__)


@router.get("/auth/google")
async def google_login(request: Request) -> RedirectResponse:
    """Redirect to Google's consent screen."""
    container: AppContainer = request.app.state.container
    url = container.identity_service.begin_login(request.session)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/auth/google/callback")
async def google_callback(
    request: Request, code: str | None = None, state: str | None = None
) -> RedirectResponse:
    """Finish the Google login and start the user's session."""
    container: AppContainer = request.app.state.container
    try:
        await container.identity_service.complete_login(request.session, code, state)
    except AuthError as exc:
        _logger.warning("Google login failed: %s", exc.message)
        request.session.clear()
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/auth/logout")
async def logout(request: Request) -> RedirectResponse:
    """Destroy the session and return to the front page."""
    container: AppContainer = request.app.state.container
    container.identity_service.logout(request.session)
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/api/user")
async def current_user(
    user: UserRecord | None = Depends(get_current_user_or_none),
) -> JSONResponse:
    """Return a summary of the logged-in user."""
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": "Not authenticated"},
        )
    return JSONResponse({"id": str(user.id), "displayName": user.display_name})
