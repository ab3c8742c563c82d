"""
Core configuration and settings for the DentalDesk application.
"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    app_name: str = "DentalDesk Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    DEBUG: bool = False  # Alias for SQLAlchemy

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Persistence substrate: "database" or "memory"
    storage_backend: str = "database"
    seed_on_empty: bool = True

    # File Upload Configuration
    max_file_size_mb: int = 5
    allowed_file_types: set = {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
        "text/plain",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }

    # CORS Settings
    cors_origins: list = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./dentaldesk.db"

    # Logging
    log_level: Optional[str] = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Export settings instance
settings = get_settings()
