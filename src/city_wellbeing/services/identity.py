"""Bridges Google identities to local users and session state."""

import logging
import secrets
from collections.abc import MutableMapping
from dataclasses import dataclass
from uuid import UUID

from city_wellbeing.adapters.google_oauth_client import GoogleOAuthClient
from city_wellbeing.domain.errors import AuthError
from city_wellbeing.domain.models import ExternalProfile, UserRecord
from city_wellbeing.services.users import UserService

SESSION_USER_KEY = "user_id"
SESSION_STATE_KEY = "oauth_state"

_logger = logging.getLogger(__name__)


def parse_profile(raw: dict[str, object]) -> ExternalProfile:
    """Build an external profile from a Google userinfo payload."""
    external_id = raw.get("sub") or raw.get("id")
    if not external_id:
        raise AuthError("Identity provider returned no subject id")
    display_name = raw.get("name") or raw.get("displayName") or str(external_id)
    email = raw.get("email")
    return ExternalProfile(
        external_id=str(external_id),
        display_name=str(display_name),
        email=str(email) if email else None,
    )


def serialize_session_user(
    session: MutableMapping[str, object], user: UserRecord
) -> None:
    """Store the user's id in the session."""
    session[SESSION_USER_KEY] = str(user.id)


@dataclass
class IdentityService:
    """Runs the OAuth login and maps sessions back to users."""

    oauth_client: GoogleOAuthClient
    user_service: UserService

    def begin_login(self, session: MutableMapping[str, object]) -> str:
        """Store a fresh state token and return the provider's login URL."""
        state = secrets.token_urlsafe(24)
        session[SESSION_STATE_KEY] = state
        return self.oauth_client.authorization_url(state)

    async def complete_login(
        self,
        session: MutableMapping[str, object],
        code: str | None,
        state: str | None,
    ) -> UserRecord:
        """Finish the OAuth callback and establish the session for the user."""
        expected_state = session.pop(SESSION_STATE_KEY, None)
        if not code:
            raise AuthError("Missing authorization code")
        if not state or state != expected_state:
            raise AuthError("OAuth state mismatch")
        try:
            raw_profile = await self.oauth_client.fetch_profile(code)
        except Exception as exc:
            raise AuthError(f"Google login failed: {exc}") from exc
        user = self.exchange_credential(parse_profile(raw_profile))
        session.clear()
        serialize_session_user(session, user)
        return user

    def exchange_credential(self, profile: ExternalProfile) -> UserRecord:
        """Return the local user for an external profile, creating it if needed."""
        if not profile.external_id:
            raise AuthError("Profile has no external id")
        try:
            return self.user_service.find_or_create_user(
                profile.external_id, profile.display_name, profile.email
            )
        except Exception as exc:
            _logger.exception("Failed during user lookup/creation")
            raise AuthError(f"User lookup failed: {exc}") from exc

    def deserialize_session_user(
        self, session: MutableMapping[str, object]
    ) -> UserRecord | None:
        """Return the user stored in the session, if any."""
        raw_id = session.get(SESSION_USER_KEY)
        if not raw_id:
            return None
        try:
            user_id = UUID(str(raw_id))
        except ValueError:
            session.pop(SESSION_USER_KEY, None)
            return None
        return self.user_service.get_user(user_id)

    def logout(self, session: MutableMapping[str, object]) -> None:
        """Destroy the session."""
        session.clear()
