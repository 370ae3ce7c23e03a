"""
Configuration Management for Meeting Cost Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: The data directory is configuration, never discovered.
Nothing in the system looks next to the executable or in the current working
directory on its own. The storage layer is always handed explicit paths.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where categories and attendee snapshots are stored."""
    
    model_config = SettingsConfigDict(
        env_prefix="MCT_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding the TOML data files"
    )
    categories_file: str = Field(
        default="categories.toml",
        min_length=1,
        description="File name of the salary category list"
    )
    attendees_file: str = Field(
        default="attendees.toml",
        min_length=1,
        description="File name of the saved attendee snapshot"
    )
    
    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand ~ so paths from the environment behave like shell paths."""
        return v.expanduser()
    
    @property
    def categories_path(self) -> Path:
        return self.data_dir / self.categories_file
    
    @property
    def attendees_path(self) -> Path:
        return self.data_dir / self.attendees_file


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="MCT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    
    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$",
        description="Minimum level for structured logs"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON lines (False for console output)"
    )
    
    # Session behaviour
    restore_attendees: bool = Field(
        default=False,
        description="Reload the last saved attendee snapshot on startup"
    )
    
    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names from the environment."""
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, plus a
    {setting_name}_error entry describing each failure.
    Useful for startup checks.
    """
    results = {}
    
    settings = get_settings()
    
    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)
    
    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
    
    return results
