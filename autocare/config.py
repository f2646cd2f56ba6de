"""
Configuration settings for the AutoCare workshop API.
Uses Pydantic for type-safe configuration management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "AutoCare Workshop"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./autocare.db"

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # one shift
    default_staff_pin: str = "1234"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # API
    api_v1_prefix: str = "/api/v1"

    # Workshop details printed on receipts
    workshop_name: str = "AutoCare Workshop"
    workshop_phone: str = "+1234567890"
    workshop_address: str = "123 Main St, City, State 12345"
    currency_symbol: str = "$"

    # Payment gateway
    payment_gateway_url: Optional[str] = None
    payment_gateway_api_key: Optional[str] = None
    payment_gateway_timeout: float = 10.0
    payment_demo_fallback: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
