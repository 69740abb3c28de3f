"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from city_wellbeing.adapters.geodb_client import HttpxGeoDbClient
from city_wellbeing.adapters.google_oauth_client import HttpxGoogleOAuthClient
from city_wellbeing.adapters.openaq_client import HttpxOpenAqClient
from city_wellbeing.adapters.openweather_client import HttpxOpenWeatherClient
from city_wellbeing.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from city_wellbeing.adapters.supabase_user_repository import SupabaseUserRepository
from city_wellbeing.config import Settings
from city_wellbeing.services.air_quality import AirQualityService
from city_wellbeing.services.cities import CityResolver
from city_wellbeing.services.identity import IdentityService
from city_wellbeing.services.records import RecordService
from city_wellbeing.services.scoring import ScoreAggregationService
from city_wellbeing.services.users import UserService
from city_wellbeing.services.weather import WeatherService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    identity_service: IdentityService
    record_service: RecordService
    score_service: ScoreAggregationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timeout = resolved_settings.http_timeout_seconds
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    record_service = RecordService(SupabaseRecordRepository(supabase_client))

    oauth_client = HttpxGoogleOAuthClient.create(
        client_id=resolved_settings.google_client_id,
        client_secret=resolved_settings.google_client_secret,
        redirect_uri=resolved_settings.google_callback_url,
        timeout=timeout,
    )
    identity_service = IdentityService(
        oauth_client=oauth_client, user_service=user_service
    )

    geodb_client = HttpxGeoDbClient.create(
        api_key=resolved_settings.geodb_api_key,
        base_url=resolved_settings.geodb_base_url,
        timeout=timeout,
    )
    openaq_client = HttpxOpenAqClient.create(
        api_key=resolved_settings.openaq_api_key,
        base_url=resolved_settings.openaq_base_url,
        timeout=timeout,
    )
    openweather_client = HttpxOpenWeatherClient.create(
        api_key=resolved_settings.openweathermap_api_key,
        base_url=resolved_settings.openweathermap_base_url,
        timeout=timeout,
    )
    score_service = ScoreAggregationService(
        city_resolver=CityResolver(geodb_client),
        air_quality_service=AirQualityService(openaq_client),
        weather_service=WeatherService(openweather_client),
    )

    async def close_resources() -> None:
        await oauth_client.close()
        await geodb_client.close()
        await openaq_client.close()
        await openweather_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        identity_service=identity_service,
        record_service=record_service,
        score_service=score_service,
        close_resources=close_resources,
    )
