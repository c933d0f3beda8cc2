"""Configuration management for the Timeline Reconstruction Engine."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TLE_",
    )

    # Paths
    cases_dir: Path = Field(default=Path("cases"))

    # Game defaults
    default_difficulty: str = Field(default="medium", description="easy, medium or hard")
    max_attempts: int = Field(default=3, ge=1, le=10)
    show_hints: bool = Field(default=True)

    # Evidence counts per difficulty tier
    easy_count: int = Field(default=8, ge=1)
    medium_count: int = Field(default=10, ge=1)
    hard_count: int = Field(default=12, ge=1)

    # Minimum score that still counts as a success
    success_threshold: int = Field(default=70, ge=0, le=100)

    log_level: str = Field(default="WARNING")

    @property
    def tier_counts(self) -> dict[str, int]:
        return {
            "easy": self.easy_count,
            "medium": self.medium_count,
            "hard": self.hard_count,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
