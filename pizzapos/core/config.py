"""Application configuration."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./pizzapos.db"

    # Restaurant
    restaurant_name: str = "Pizza Shop"

    # Catalog YAML; the packaged seed catalog is used when unset
    catalog_file: Optional[str] = None

    # Pricing
    auto_deals_enabled: bool = True

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
