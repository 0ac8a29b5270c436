"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = "http://localhost:8080"
    http_timeout_seconds: float = 10
    page_size: int = 8
    credentials_path: str = "~/.mimix_admin/credentials.json"
    redirect_delay_seconds: float = 0.5
    login_page: str = "index.html"
    dashboard_page: str = "dashboard.html"
    date_display_format: str = "%d/%m/%Y"
    datetime_display_format: str = "%d/%m/%Y, %H:%M:%S"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip whitespace and trailing slashes from the API base URL."""
    cleaned = raw.strip().rstrip("/")
    if not cleaned:
        raise ValueError("api_base_url must not be empty")
    return cleaned
