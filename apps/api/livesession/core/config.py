"""Application configuration for the session coordinator and provisioning API."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    ot_api_key: str = Field(default="")
    ot_api_secret: str = Field(default="")
    token_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)
    token_algorithm: str = Field(default="HS256")
    session_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)

    api_base_url: str = Field(default="http://localhost:8000")
    create_session_path: str = Field(default="/api/create-session")
    generate_token_path: str = Field(default="/api/generate-token")
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        """Allow comma-separated env values for CORS origins."""

        if isinstance(value, str):
            parts = [item.strip() for item in value.split(",") if item.strip()]
            return parts
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
