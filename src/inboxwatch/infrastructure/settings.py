"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# A bare `parts` selects every nested part level
DEFAULT_MESSAGE_FIELDS = "id,labelIds,snippet,payload(mimeType,filename,headers,body/data,parts)"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Inboxwatch"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Google OAuth client
    google_client_id: str = ""
    google_client_secret: SecretStr = Field(default=SecretStr(""))
    google_token_url: str = "https://oauth2.googleapis.com/token"

    # Seed credentials from the out-of-band consent flow
    google_access_token: SecretStr | None = None
    google_refresh_token: SecretStr | None = None

    # Gmail API
    gmail_api_base_url: str = "https://gmail.googleapis.com/gmail/v1"
    gmail_message_fields: str = DEFAULT_MESSAGE_FIELDS
    http_timeout_seconds: float = 30.0

    # Marker detection
    marker_prefix: str = "spam-test-"
    alert_labels: list[str] = Field(default_factory=lambda: ["SPAM", "TRASH"])

    # Operational endpoints (empty disables /internal/*)
    internal_api_secret: SecretStr = Field(default=SecretStr(""))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
