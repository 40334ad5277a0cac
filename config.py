"""
Configuration management using Pydantic Settings.
Validates environment variables up front so a bad setup fails before any file is read.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.review.errors import MissingFoundersConfig
from core.review.models import ReviewConfig


class Settings(BaseSettings):
    """Application settings with validation."""

    # Comma-separated founder names (required to run a review)
    FOUNDERS: Optional[str] = Field(
        default=None,
        description="Comma-separated founder names, e.g. 'Tom,Jerry'"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Logging level"
    )

    # Performance settings
    MAX_LOAD_WORKERS: int = Field(
        default=8,
        ge=1,
        le=32,
        description="Maximum parallel workers for reading input files (1-32)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @property
    def founders(self) -> List[str]:
        """Founder names in the order given, blanks and repeats dropped."""
        names: List[str] = []
        for raw in (self.FOUNDERS or "").split(","):
            name = raw.strip()
            if name and name not in names:
                names.append(name)
        return names

    def review_config(self) -> ReviewConfig:
        """Raises MissingFoundersConfig when FOUNDERS is unset or empty."""
        founders = self.founders
        if not founders:
            raise MissingFoundersConfig()
        return ReviewConfig(founders=founders)


def get_settings() -> Settings:
    return Settings()
