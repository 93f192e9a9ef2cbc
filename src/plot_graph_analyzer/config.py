"""Configuration management for Plot Graph Analyzer."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analysis settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PGA_",
    )

    # Annotation pass
    keep_motivation: bool = Field(
        default=True,
        description="Keep the motivation annotation in labels whose motivation could not be resolved",
    )
    perseverance_skips_motivation: bool = Field(
        default=False,
        description="Re-asserted intentions get no motivation edges and are not added to the history",
    )

    # Structural pass
    trim_repeated_tail: bool = Field(
        default=False,
        description="Trim the event loop a plot ends in once every character repeats itself",
    )
    repeat_threshold: int = Field(default=5, ge=2, description="Repetitions of a trailing event block before trimming")

    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
