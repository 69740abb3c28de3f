"""Tests for the identity bridge."""

import asyncio
from dataclasses import dataclass
from uuid import uuid4

import pytest

from city_wellbeing.domain.errors import AuthError
from city_wellbeing.domain.models import ExternalProfile
from city_wellbeing.services.identity import (
    SESSION_STATE_KEY,
    SESSION_USER_KEY,
    IdentityService,
    parse_profile,
    serialize_session_user,
)
from city_wellbeing.services.users import UserService
from tests.conftest import FakeGoogleOAuthClient, InMemoryUserRepository


def _service(
    repository: InMemoryUserRepository | None = None,
) -> IdentityService:
    return IdentityService(
        oauth_client=FakeGoogleOAuthClient(),
        user_service=UserService(repository or InMemoryUserRepository()),
    )


def test_parse_profile_reads_google_userinfo() -> None:
    profile = parse_profile({"sub": "123", "name": "Alice", "email": "a@example.com"})

    assert profile == ExternalProfile(
        external_id="123", display_name="Alice", email="a@example.com"
    )


def test_parse_profile_without_subject_is_rejected() -> None:
    with pytest.raises(AuthError):
        parse_profile({"name": "Nobody"})


def test_begin_login_stores_state() -> None:
    session: dict[str, object] = {}

    url = _service().begin_login(session)

    assert session[SESSION_STATE_KEY]
    assert str(session[SESSION_STATE_KEY]) in url


def test_complete_login_creates_user_and_session() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)
    session: dict[str, object] = {SESSION_STATE_KEY: "state-1"}

    user = asyncio.run(service.complete_login(session, "code-alice", "state-1"))

    assert user.google_id == "google-alice"
    assert session == {SESSION_USER_KEY: str(user.id)}
    assert service.deserialize_session_user(session) == user


def test_complete_login_rejects_state_mismatch() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)
    session: dict[str, object] = {SESSION_STATE_KEY: "expected"}

    with pytest.raises(AuthError, match="state"):
        asyncio.run(service.complete_login(session, "code-alice", "forged"))

    assert repository.users == {}
    assert SESSION_STATE_KEY not in session


def test_complete_login_wraps_provider_errors() -> None:
    service = _service()
    session: dict[str, object] = {SESSION_STATE_KEY: "state-1"}

    with pytest.raises(AuthError, match="Google login failed"):
        asyncio.run(service.complete_login(session, "unknown-code", "state-1"))


@dataclass
class _BrokenUserRepository(InMemoryUserRepository):
    def get_by_google_id(self, google_id: str):  # type: ignore[no-untyped-def]
        raise ConnectionError("store offline")


def test_exchange_credential_reports_store_failure_as_auth_error() -> None:
    service = _service(_BrokenUserRepository())

    with pytest.raises(AuthError, match="store offline"):
        service.exchange_credential(ExternalProfile("123", "Alice"))


def test_deserialize_session_user_ignores_unknown_or_invalid_ids() -> None:
    service = _service()

    assert service.deserialize_session_user({}) is None
    assert service.deserialize_session_user({SESSION_USER_KEY: str(uuid4())}) is None
    session: dict[str, object] = {SESSION_USER_KEY: "not-a-uuid"}
    assert service.deserialize_session_user(session) is None
    assert session == {}


def test_serialize_and_logout() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)
    user = repository.create_user("google-1", "Alice", None)
    session: dict[str, object] = {}

    serialize_session_user(session, user)
    assert service.deserialize_session_user(session) == user

    service.logout(session)
    assert service.deserialize_session_user(session) is None
