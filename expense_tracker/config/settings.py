"""
Configuration Management for Expense Tracker

Every setting comes from the environment or a local .env file and is
type-checked by pydantic-settings when first read.

DESIGN DECISION: One module owns every knob.
Which store backend is used, where it lives and what the two
store keys are called is decided in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "json_file", "google_sheets"] = Field(
        default="json_file",
        description="Which store backend to use"
    )
    data_file: str = Field(
        default="expense_tracker_data.json",
        description="Path of the JSON file used by the json_file backend"
    )

    # Keys within the store
    expenses_key: str = Field(
        default="expenses",
        min_length=1,
        description="Store key holding the JSON array of expenses"
    )
    target_key: str = Field(
        default="daily_target",
        min_length=1,
        description="Store key holding the daily target"
    )


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Service account key file (JSON)"
    )
    spreadsheet_id: str = Field(
        ...,
        description="Spreadsheet key from the sheet URL"
    )
    worksheet_name: str = Field(
        default="KeyValueStore",
        description="Name of the worksheet holding key/value rows"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Only warn on a missing key file; it may be mounted after startup."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}; "
                "the google_sheets backend will fail to connect until it exists."
            )
        return v


class AppSettings(BaseSettings):
    """
    Display, logging and export settings.

    Read without a prefix, e.g. LOG_LEVEL or CURRENCY_SYMBOL.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="development, staging or production"
    )
    debug_mode: bool = Field(
        default=False,
        description="Show extra diagnostics in the UI"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level for structured logs"
    )

    # Display
    currency_symbol: str = Field(
        default="Rs.",
        max_length=5,
        description="Currency prefix shown before amounts"
    )

    # Report export
    report_output_dir: str = Field(
        default="reports",
        description="Directory that exported HTML reports are written to"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing of the standard level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def report_output_path(self) -> Path:
        """Get the report directory as a Path."""
        return Path(self.report_output_dir)


class Settings(BaseSettings):
    """
    Root settings container.

    Each section is built on access, so a missing Google Sheets
    configuration only matters when that backend is selected.
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
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    The process-wide Settings instance.

    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Try to load each settings section.

    Returns {section: loaded_ok}, plus {section}_error messages.
    Google Sheets is only checked when it is the selected backend.
    """
    results = {}

    settings = get_settings()

    try:
        storage = settings.storage
        results["storage"] = True
    except Exception as e:
        storage = None
        results["storage"] = False
        results["storage_error"] = str(e)

    if storage is not None and storage.backend == "google_sheets":
        try:
            _ = settings.google_sheets
            results["google_sheets"] = True
        except Exception as e:
            results["google_sheets"] = False
            results["google_sheets_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
