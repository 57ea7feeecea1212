"""
Core configuration module using Pydantic Settings.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "localFoodLovers"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Favorites uniqueness backed by a unique compound index
    ENFORCE_UNIQUE_FAVORITES: bool = True

    # Malformed ids in paths: False -> 500 (legacy clients), True -> 400
    STRICT_OBJECT_IDS: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    SERVERLESS: bool = False  # ASGI app is served by an external platform
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Application
    APP_NAME: str = "Local Food Lovers API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


# Global settings instance
settings = Settings()
