"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "travel-buddy"
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    mail_api_key: str
    mail_from: str = '"Travel Buddy" <no-reply@example.com>'
    mail_base_url: str = "https://api.resend.com"
    stripe_secret_key: str
    stripe_base_url: str = "https://api.stripe.com"
    frontend_url: str = "http://localhost:3000"
    free_pending_request_limit: int | None = 3
    cors_origins: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [origin.strip() for origin in cleaned.split(",") if origin.strip()]
