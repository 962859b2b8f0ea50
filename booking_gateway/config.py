"""
Configuration and settings for the booking gateway.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from booking_gateway.errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Supabase (bookings table + auth)
    supabase_url: Optional[str] = Field(default=None)
    supabase_key: Optional[str] = Field(default=None)
    bookings_table: str = Field(default="bookings")

    # Optional direct database connection for the bookings table.
    database_url: Optional[str] = Field(default=None)

    # CORS
    frontend_url: str = Field(default="http://localhost:3000")
    cors_origin_regex: str = Field(default=r"https://.*\.onrender\.com")

    # Front-end bundle served for every non-API GET
    static_dir: str = Field(default=str(PROJECT_ROOT / "public"))

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    @field_validator("static_dir")
    @classmethod
    def _anchor_static_dir(cls, value: str) -> str:
        path = Path(value)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return str(path)

    def require_backend_credentials(self) -> None:
        """Raise ``ConfigurationError`` unless Supabase credentials are set."""
        if self.use_in_memory_backends:
            return
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_KEY")
        if missing:
            raise ConfigurationError(missing)

    def masked_credentials(self) -> dict[str, str]:
        return {
            "SUPABASE_URL": "***" if self.supabase_url else "MISSING",
            "SUPABASE_KEY": "***" if self.supabase_key else "MISSING",
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
