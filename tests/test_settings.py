"""
Tests for configuration loading.

Every test runs in an empty temporary directory so no local .env file
leaks in.
"""

import pytest
from pathlib import Path

from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    GoogleSheetsSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in (
        "EXPENSE_STORE_BACKEND",
        "EXPENSE_STORE_DATA_FILE",
        "EXPENSE_STORE_EXPENSES_KEY",
        "EXPENSE_STORE_TARGET_KEY",
        "GOOGLE_SHEETS_CREDENTIALS_PATH",
        "GOOGLE_SHEETS_SPREADSHEET_ID",
        "LOG_LEVEL",
        "CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self):
        settings = StorageSettings()
        assert settings.backend == "json_file"
        assert settings.expenses_key == "expenses"
        assert settings.target_key == "daily_target"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORE_BACKEND", "memory")
        monkeypatch.setenv("EXPENSE_STORE_EXPENSES_KEY", "household")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.expenses_key == "household"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORE_BACKEND", "redis")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_dotenv_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("EXPENSE_STORE_TARGET_KEY=target\n", encoding="utf-8")
        assert StorageSettings().target_key == "target"


class TestGoogleSheetsSettings:
    """Tests for GoogleSheetsSettings."""

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            GoogleSheetsSettings()

    def test_missing_credentials_file_warns(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SHEETS_CREDENTIALS_PATH", "missing.json")
        monkeypatch.setenv("GOOGLE_SHEETS_SPREADSHEET_ID", "abc123")
        with pytest.warns(UserWarning, match="credentials file not found"):
            settings = GoogleSheetsSettings()
        assert settings.worksheet_name == "KeyValueStore"


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.currency_symbol == "Rs."
        assert settings.log_level == "INFO"
        assert settings.report_output_path == Path("reports")

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        with pytest.raises(ValidationError, match="Unknown log level"):
            AppSettings()


class TestValidateAllSettings:
    """Tests for validate_all_settings."""

    def test_default_configuration_is_valid(self):
        status = validate_all_settings()
        assert status == {"storage": True, "app": True}

    def test_google_sheets_checked_when_selected(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORE_BACKEND", "google_sheets")
        status = validate_all_settings()
        assert status["google_sheets"] is False
        assert "google_sheets_error" in status

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
