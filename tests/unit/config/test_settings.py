"""Tests for Settings configuration class."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cvdraft.config.settings import Settings, get_settings, reset_settings


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, isolated_env, monkeypatch):
        for var in ("CV_PATH", "NOTES_PATH", "JOB_CONFIG_PATH"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.cv_path == Path("config/cv.base.json")
        assert settings.notes_path == Path("config/covering-letter-notes.md")
        assert settings.job_config_path == Path("config/job.config.json")
        assert settings.log_level == "INFO"
        assert settings.debug is False


class TestSettingsFromEnv:
    def test_paths_from_env(self, isolated_env, monkeypatch):
        monkeypatch.setenv("CV_PATH", "/data/cv.yaml")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings(_env_file=None)

        assert settings.cv_path == Path("/data/cv.yaml")
        assert settings.debug is True

    def test_log_level_is_normalised(self, isolated_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self, isolated_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_file(self, isolated_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("NOTES_PATH=notes/acme.md\n", encoding="utf-8")

        settings = Settings(_env_file=env_file)

        assert settings.notes_path == Path("notes/acme.md")


class TestSettingsSingleton:
    def test_get_settings_caches(self, isolated_env):
        assert get_settings() is get_settings()

    def test_reset_settings(self, isolated_env):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
