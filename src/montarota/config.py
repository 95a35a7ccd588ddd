"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MONTAROTA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Monta a Rota API"
    version: str = "1.0.0"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    # Security
    jwt_secret: str = Field(default="change-in-production", description="HMAC secret used to sign access tokens.")
    jwt_algorithm: str = "HS256"
    token_expire_days: int = Field(default=30, ge=1)
    gps_requires_auth: bool = Field(
        default=False,
        description="Require a bearer token on courier GPS updates (courier devices post anonymously by default).",
    )

    # Business rules
    platform_fee: float = Field(default=4.50, ge=0.0, description="Fixed fee charged per delivered order.")
    currency_symbol: str = "R$"
    default_preparation_minutes: int = Field(default=20, ge=0)
    delivery_buffer_minutes: int = Field(default=20, ge=0)
    default_order_limit: int = Field(default=50, ge=1)
    tracking_history_limit: int = Field(default=100, ge=1)
    courier_credit_max_retries: int = Field(default=3, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("*",),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
