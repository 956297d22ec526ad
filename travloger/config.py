"""
Application configuration using pydantic-settings.
All settings are loaded from environment variables.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file (travloger/)
PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"

# Load .env into the environment before pydantic-settings reads it
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Travloger Back-Office API"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000"]
    frontend_url: str = "http://localhost:3000"
    api_base_url: str = "http://localhost:8000"

    # Database
    database_url: str
    auto_create_tables: bool = False

    # Supabase (auth + storage)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    storage_bucket: str = "travloger-media"

    # Razorpay payment links
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_webhook_secret: str = ""
    razorpay_api_url: str = "https://api.razorpay.com/v1"
    payment_currency: str = "INR"

    # SendGrid
    sendgrid_api_key: str = ""
    sendgrid_from_email: str = "no-reply@travloger.in"
    sendgrid_from_name: str = "Travloger"

    # Employee active sessions
    session_timeout_minutes: int = 5
    session_cleanup_interval_minutes: int = 5
    scheduler_enabled: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def admin_roles(self) -> tuple[str, ...]:
        return ("admin", "Super Admin")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
