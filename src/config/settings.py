"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stock_history.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    # Apply pending schema migrations when the global pool is first opened
    migrate_on_connect: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class CostingSettings(BaseSettings):
    """WAC costing engine configuration."""

    model_config = SettingsConfigDict(env_prefix="COSTING_")

    # Output rounding, applied once by the summary assembler
    money_scale: int = Field(default=2, ge=0, le=10)
    rounding_mode: Literal["ROUND_HALF_UP", "ROUND_HALF_EVEN"] = "ROUND_HALF_UP"

    # Decimal context precision used during ledger arithmetic
    decimal_precision: int = Field(default=28, ge=10)

    # What to do when an outbound event exceeds on-hand quantity
    negative_stock_policy: Literal["fail", "clamp"] = "fail"

    # Upper bound on replayed events per request (0 disables the check)
    max_events_per_request: int = Field(default=1_000_000, ge=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "WAC Costing Engine"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings, validate_default=True)
    costing: CostingSettings = Field(default_factory=CostingSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
