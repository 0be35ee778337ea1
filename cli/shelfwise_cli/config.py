"""Configuration management for the Shelfwise client."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHELFWISE_",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Shelfwise API base URL",
    )
    api_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token sent with every request",
    )

    # ==========================================================================
    # Search Configuration
    # ==========================================================================
    debounce_ms: int = Field(
        default=500,
        ge=0,
        description="Quiet interval before a keystroke search fires",
    )
    initial_query: str = Field(
        default="",
        description="Query searched for on startup",
    )
    window_size: int = Field(
        default=2,
        ge=0,
        description="Pages shown on each side of the current page",
    )
    min_query_length: int = Field(
        default=0,
        ge=0,
        description="Shortest query sent while typing",
    )
    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Books per page",
    )
    sort_by: str = Field(
        default="accessionNumber",
        description="Book field results are sorted by",
    )
    sort_dir: str = Field(
        default="ASC",
        description="Sort direction: 'ASC' or 'DESC'",
    )

    # ==========================================================================
    # General
    # ==========================================================================
    log_level: str = Field(default="WARNING", description="Logging level")
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".shelfwise",
        description="Directory for persisted UI preferences",
    )

    @property
    def preferences_path(self) -> Path:
        """UI preferences file."""
        return self.data_dir / "preferences.json"

    # ==========================================================================
    # Validators
    # ==========================================================================
    @field_validator("data_dir", mode="after")
    @classmethod
    def ensure_data_dir_exists(cls, v: Path) -> Path:
        """Ensure data directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v

    @field_validator("sort_dir", mode="after")
    @classmethod
    def validate_sort_dir(cls, v: str) -> str:
        """Validate sort direction."""
        v = v.upper()
        if v not in {"ASC", "DESC"}:
            raise ValueError("Invalid sort direction. Must be 'ASC' or 'DESC'")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful after env changes)."""
    get_settings.cache_clear()
    return get_settings()
