"""
Configuration Management for Terminal Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable path, URL and timeout is declared in one of the sections below
and validated when the section is first read.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_DIR = Path.home() / ".budget"


class StorageSettings(BaseSettings):
    """Budget file storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=DEFAULT_DATA_DIR,
        description="Root directory for budget files, cache and logs"
    )
    files_dirname: str = Field(
        default="files",
        min_length=1,
        description="Sub-directory of data_dir holding one JSON file per budget"
    )
    seed_example: bool = Field(
        default=True,
        description="Create an example budget on first run"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Allow '~' in the configured path."""
        return v.expanduser()

    @property
    def files_dir(self) -> Path:
        return self.data_dir / self.files_dirname


class RateSettings(BaseSettings):
    """Exchange rate lookup configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_RATES_",
        extra="ignore"
    )

    primary_api: str = Field(
        default="https://api.frankfurter.dev/v1/latest?base={base}",
        description="Primary rate source URL template ({base} is substituted)"
    )
    backup_api: str = Field(
        default="https://open.er-api.com/v6/latest/{base}",
        description="Backup rate source URL template ({base} is substituted)"
    )
    cache_ttl: int = Field(
        default=3600,
        ge=1,
        description="Seconds a fetched rate table stays valid"
    )
    cache_filename: str = Field(
        default="exchange_cache.json",
        min_length=1,
        description="Cache file name inside the data directory"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Per-request timeout for rate sources"
    )

    @field_validator('primary_api', 'backup_api')
    @classmethod
    def require_base_placeholder(cls, v: str) -> str:
        """URL templates must say where the base currency goes."""
        if "{base}" not in v:
            raise ValueError("Rate source URL must contain a '{base}' placeholder")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level written to the log file"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path (defaults to <data_dir>/budget.log)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings:
    """
    Aggregates all sub-settings for easy access.

    Sections are built on access so a broken section only fails
    the code that actually needs it.
    """

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def rates(self) -> RateSettings:
        return RateSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def cache_path(self) -> Path:
        return self.storage.data_dir / self.rates.cache_filename

    @property
    def log_path(self) -> Path:
        return self.app.log_file or self.storage.data_dir / "budget.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {section_name: is_valid}, plus a
    "<section>_error" entry for every invalid section.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "rates", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
