"""Application configuration using Pydantic Settings."""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Storage
    storage_backend: Literal["memory", "mongodb"] = "memory"
    mongodb_url: Optional[str] = None
    mongodb_db_name: str = "weight_goals"

    # User profile lookup
    profile_lookup: Literal["fixed", "registry"] = "registry"
    fixed_user_age: int = 30

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


settings = Settings()
