"""
Configuration management using Pydantic Settings.
All environment variables are loaded and validated here.
"""

from typing import List, Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ================================
    # Application Configuration
    # ================================
    APP_NAME: str = "StudyAid"
    APP_ENV: Literal["development", "staging", "production", "testing"] = "development"
    DEBUG: bool = True

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:3001"

    @field_validator("ALLOWED_ORIGINS")
    @classmethod
    def parse_origins(cls, v: str) -> List[str]:
        """Parse comma-separated origins into list."""
        return [origin.strip() for origin in v.split(",")]

    # ================================
    # Database Configuration
    # ================================
    DATABASE_URL: str = Field(..., description="Async SQLAlchemy connection string")
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10

    # ================================
    # Upload Configuration
    # ================================
    UPLOAD_DIR: str = "uploads"
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    UPLOAD_ALLOWED_TYPES: str = "pdf|doc|docx|jpeg|jpg|png"

    # ================================
    # OCR Configuration
    # ================================
    OCR_LANGUAGE: str = "eng"
    TESSERACT_CMD: Optional[str] = None  # Falls back to tesseract on PATH

    # ================================
    # Webpage Scraping
    # ================================
    WEBPAGE_REQUEST_TIMEOUT: int = 10  # seconds

    # ================================
    # YouTube API
    # ================================
    YOUTUBE_API_KEY: Optional[str] = None
    YOUTUBE_FETCH_TRANSCRIPTS: bool = True
    YOUTUBE_PREFERRED_TRANSCRIPT_LANGUAGES: str = "en,en-US,en-GB"

    @field_validator("YOUTUBE_PREFERRED_TRANSCRIPT_LANGUAGES")
    @classmethod
    def parse_transcript_languages(cls, v: str) -> List[str]:
        """Parse comma-separated languages into list."""
        return [lang.strip() for lang in v.split(",")]

    # ================================
    # AI Service Configuration
    # ================================
    # Multiplier applied to the simulated latency of the placeholder AI calls.
    # 0 disables the delay entirely (used by the test suite).
    AI_STUB_DELAY_SCALE: float = Field(1.0, ge=0)

    # ================================
    # Logging Configuration
    # ================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite (local runs and tests)."""
        return self.DATABASE_URL.startswith("sqlite")


# Global settings instance
settings = Settings()
