"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from urllib.parse import parse_qs, urlencode, urlparse
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from city_wellbeing.adapters.geodb_client import GeoDbClient
from city_wellbeing.adapters.google_oauth_client import GoogleOAuthClient
from city_wellbeing.adapters.openaq_client import OpenAqClient
from city_wellbeing.adapters.openweather_client import OpenWeatherClient
from city_wellbeing.config import Settings
from city_wellbeing.containers import AppContainer
from city_wellbeing.domain.models import UserRecord
from city_wellbeing.domain.records import NewScoreRecord, ScoreRecord
from city_wellbeing.services.air_quality import AirQualityService
from city_wellbeing.services.cities import CityResolver
from city_wellbeing.services.identity import IdentityService
from city_wellbeing.services.records import RecordRepository, RecordService
from city_wellbeing.services.scoring import ScoreAggregationService
from city_wellbeing.services.users import UserRepository, UserService
from city_wellbeing.services.weather import WeatherService

API_KEY = "client-api-key"

PARIS = {
    "name": "Paris",
    "country": "France",
    "latitude": 48.8566,
    "longitude": 2.3522,
    "population": 2145906,
}

GOOGLE_PROFILES = {
    "code-alice": {"sub": "google-alice", "name": "Alice", "email": "a@example.com"},
    "code-bob": {"sub": "google-bob", "name": "Bob"},
}


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        for user in self.users.values():
            if user.google_id == google_id:
                return user
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(
        self, google_id: str, display_name: str, email: str | None
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            google_id=google_id,
            display_name=display_name,
            email=email,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository for tests."""

    records: list[ScoreRecord] = field(default_factory=list)
    error: Exception | None = None

    def create_record(self, record: NewScoreRecord) -> ScoreRecord:
        if self.error:
            raise self.error
        stored = ScoreRecord(
            id=uuid4(),
            user_id=record.user_id,
            city=record.city,
            country=record.country,
            total_score=record.total_score,
            wellbeing_factors=record.wellbeing_factors,
            saved_at=datetime.now(tz=UTC),
        )
        self.records.append(stored)
        return stored

    def list_by_user(self, user_id: UUID) -> list[ScoreRecord]:
        if self.error:
            raise self.error
        owned = [record for record in self.records if record.user_id == user_id]
        return sorted(owned, key=lambda record: record.total_score, reverse=True)


@dataclass
class FakeGeoDbClient(GeoDbClient):
    """Fake GeoDB client returning canned cities."""

    cities: list[dict[str, object]] = field(default_factory=lambda: [dict(PARIS)])
    error: Exception | None = None
    payload: object | None = None
    calls: list[str] = field(default_factory=list)

    async def find_cities(self, name_prefix: str, limit: int = 1) -> dict[str, object]:
        self.calls.append(name_prefix)
        if self.error:
            raise self.error
        if self.payload is not None:
            return self.payload  # type: ignore[return-value]
        return {"data": self.cities[:limit]}


@dataclass
class FakeOpenAqClient(OpenAqClient):
    """Fake OpenAQ client returning a single PM2.5 measurement."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "results": [{"measurements": [{"value": 8.5, "unit": "µg/m³"}]}]
        }
    )
    error: Exception | None = None
    calls: list[tuple[float, float]] = field(default_factory=list)

    async def latest_measurements(
        self,
        latitude: float,
        longitude: float,
        *,
        radius_m: int = 10000,
        parameter: str = "pm25",
        limit: int = 1,
    ) -> dict[str, object]:
        self.calls.append((latitude, longitude))
        if self.error:
            raise self.error
        return self.payload


@dataclass
class FakeOpenWeatherClient(OpenWeatherClient):
    """Fake OpenWeatherMap client returning a fixed temperature."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"main": {"temp": 293.15}}
    )
    error: Exception | None = None
    calls: list[tuple[float, float]] = field(default_factory=list)

    async def current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        self.calls.append((latitude, longitude))
        if self.error:
            raise self.error
        return self.payload


@dataclass
class FakeGoogleOAuthClient(GoogleOAuthClient):
    """Fake Google client mapping authorization codes to profiles."""

    profiles: dict[str, dict[str, object]] = field(
        default_factory=lambda: dict(GOOGLE_PROFILES)
    )

    def authorization_url(self, state: str) -> str:
        return "https://accounts.example.com/auth?" + urlencode({"state": state})

    async def fetch_profile(self, code: str) -> dict[str, object]:
        if code not in self.profiles:
            raise RuntimeError("invalid_grant")
        return self.profiles[code]


def login(client: TestClient, code: str = "code-alice") -> None:
    """Run the Google login flow against the fake provider."""
    response = client.get("/auth/google", follow_redirects=False)
    state = parse_qs(urlparse(response.headers["location"]).query)["state"][0]
    client.get(
        "/auth/google/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZSJ9.c2ln",
        session_secret="session-secret",
        client_api_key=API_KEY,
        google_client_id="google-client",
        google_client_secret="google-secret",
        geodb_api_key="geodb-key",
        openaq_api_key="openaq-key",
        openweathermap_api_key="owm-key",
        static_dir=None,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def geodb_client() -> FakeGeoDbClient:
    return FakeGeoDbClient()


@pytest.fixture
def openaq_client() -> FakeOpenAqClient:
    return FakeOpenAqClient()


@pytest.fixture
def openweather_client() -> FakeOpenWeatherClient:
    return FakeOpenWeatherClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    record_repository: InMemoryRecordRepository,
    geodb_client: FakeGeoDbClient,
    openaq_client: FakeOpenAqClient,
    openweather_client: FakeOpenWeatherClient,
) -> AppContainer:
    user_service = UserService(user_repository)
    identity_service = IdentityService(
        oauth_client=FakeGoogleOAuthClient(), user_service=user_service
    )
    score_service = ScoreAggregationService(
        city_resolver=CityResolver(geodb_client),
        air_quality_service=AirQualityService(openaq_client),
        weather_service=WeatherService(openweather_client),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        identity_service=identity_service,
        record_service=RecordService(record_repository),
        score_service=score_service,
        close_resources=close_resources,
    )
