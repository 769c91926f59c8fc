"""
Tests for settings and .env loading.
"""

import os
from pathlib import Path

import pytest
from versioncheck.config import Settings
from versioncheck.env import load_env


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.deployment_id is None
        assert settings.source == "metadata"
        assert settings.placeholder == "unavailable"
        assert settings.log_level == "INFO"
        assert settings.log_dir is None

    def test_from_env(self):
        settings = Settings.from_env({
            "VERSIONCHECK_DEPLOYMENT_ID": "demo-app",
            "VERSIONCHECK_SOURCE": "environment",
            "VERSIONCHECK_PLACEHOLDER": "?",
            "VERSIONCHECK_LOG_LEVEL": "debug",
            "VERSIONCHECK_LOG_DIR": "var/log",
        })
        assert settings.deployment_id == "demo-app"
        assert settings.source == "environment"
        assert settings.placeholder == "?"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path("var/log")

    def test_empty_values_use_defaults(self):
        settings = Settings.from_env({"VERSIONCHECK_SOURCE": "", "VERSIONCHECK_DEPLOYMENT_ID": ""})
        assert settings.source == "metadata"
        assert settings.deployment_id is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("VERSIONCHECK_DEPLOYMENT_ID", "demo-app")
        assert Settings.from_env().deployment_id == "demo-app"

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="Unsupported runtime source"):
            Settings.from_env({"VERSIONCHECK_SOURCE": "registry"})

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unsupported log level"):
            Settings(log_level="LOUD")


class TestLoadEnv:
    """Test .env loading from the working directory."""

    def test_loads_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VERSIONCHECK_SOURCE", "unset")
        monkeypatch.delenv("VERSIONCHECK_SOURCE")
        (tmp_path / ".env").write_text("# deployment settings\nVERSIONCHECK_SOURCE=environment\n")

        load_env()

        assert os.environ["VERSIONCHECK_SOURCE"] == "environment"

    def test_process_environment_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VERSIONCHECK_SOURCE", "metadata")
        (tmp_path / ".env").write_text("VERSIONCHECK_SOURCE=environment\n")

        load_env()

        assert os.environ["VERSIONCHECK_SOURCE"] == "metadata"

    def test_missing_dotenv_is_ignored(self, monkeypatch):
        monkeypatch.setenv("VERSIONCHECK_SOURCE", "unset")
        monkeypatch.delenv("VERSIONCHECK_SOURCE")

        load_env()

        assert "VERSIONCHECK_SOURCE" not in os.environ
