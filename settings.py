# settings.py
"""
GymPortal API Settings.

Pydantic settings management with environment variable support.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # MongoDB - REQUIRED from environment
    DATABASE_URL: str = Field(..., description="MongoDB connection string (required)")
    DATABASE_NAME: str = Field(default="gymportal")

    # JWT - REQUIRED from environment
    SECRET_KEY: str = Field(..., description="JWT signing secret (required)")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30)

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Workouts
    WORKOUTS_PAGE_SIZE: int = Field(default=10, ge=1, le=100)
    REPORT_TITLE: str = "Workout History"

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from default in production")


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
