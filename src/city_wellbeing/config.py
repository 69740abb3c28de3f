"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_secret: str
    client_api_key: str
    session_max_age_seconds: int = 60 * 60 * 24
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_callback_url: str = "http://localhost:3000/auth/google/callback"
    geodb_api_key: str | None = None
    geodb_base_url: str = "https://wft-geo-db.p.rapidapi.com/v1/geo"
    openaq_api_key: str | None = None
    openaq_base_url: str = "https://api.openaq.org/v2"
    openweathermap_api_key: str | None = None
    openweathermap_base_url: str = "http://api.openweathermap.org/data/2.5"
    http_timeout_seconds: float = 10.0
    static_dir: str | None = None
    port: int = 3000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
