"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values of DEVTOOLS that switch the debugging surface on
DEVTOOLS_ENABLED_VALUES = ("1", "true", "TRUE")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "production"
    log_level: str = "INFO"

    # Local server the desktop shell talks to
    host: str = "127.0.0.1"
    port: int = 8765

    # Debugging UI (OpenAPI docs); read once at start-up
    devtools: bool = False

    # Cloudflare R2
    r2_endpoint_template: str = "https://{account_id}.r2.cloudflarestorage.com"

    # Aliyun OSS
    oss_host_template: str = "{bucket}.{region}.aliyuncs.com"
    oss_default_content_type: str = "application/octet-stream"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("devtools", mode="before")
    @classmethod
    def parse_devtools(cls, value: Any) -> bool:
        """Only "1", "true" and "TRUE" enable devtools; anything else disables them."""
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value) in DEVTOOLS_ENABLED_VALUES

    @property
    def docs_enabled(self) -> bool:
        return self.devtools or self.environment == "dev"


# Global settings instance
settings = Settings()
