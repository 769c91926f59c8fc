"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Optional

from versioncheck import runtime
from versioncheck.errors import NotFoundError
from versioncheck.identity import LookupResult, VersionIdentity
from versioncheck.logger import get_logger, reset_logger

CONFIG_VARS = [
    "VERSIONCHECK_DEPLOYMENT_ID",
    "VERSIONCHECK_SOURCE",
    "VERSIONCHECK_PLACEHOLDER",
    "VERSIONCHECK_LOG_LEVEL",
    "VERSIONCHECK_LOG_DIR",
]


class FakeDistribution:
    """Stand-in for importlib.metadata.Distribution."""

    def __init__(self, version: Optional[str], files: Optional[Dict[str, str]] = None):
        self.version = version
        self.files = files or {}

    def read_text(self, filename: str) -> Optional[str]:
        return self.files.get(filename)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger without console output for every test."""
    reset_logger()
    logger = get_logger(enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch, tmp_path):
    """Isolate tests from VERSIONCHECK_* variables and any .env in the cwd."""
    for var in CONFIG_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def current_build() -> VersionIdentity:
    """Build identity of scenario 1."""
    return VersionIdentity(sequence=7, label="1.2.3")


@pytest.fixture
def newer_build() -> VersionIdentity:
    """Build identity ahead of what is deployed."""
    return VersionIdentity(sequence=8, label="1.3.0")


@pytest.fixture
def deployed() -> LookupResult:
    """Successful runtime lookup."""
    return LookupResult.success(VersionIdentity(sequence=7, label="1.2.3"))


@pytest.fixture
def not_deployed() -> LookupResult:
    """Runtime lookup that found no record."""
    return LookupResult.failure(
        NotFoundError("demo-app", "metadata", reason="distribution is not installed")
    )


@pytest.fixture
def fake_distribution(monkeypatch):
    """Factory patching importlib.metadata.distribution with a fake."""
    def install(version, files=None, name="demo-app"):
        dist = FakeDistribution(version, files)
        real = runtime.metadata.distribution

        def distribution(requested):
            if requested == name:
                return dist
            return real(requested)

        monkeypatch.setattr(runtime.metadata, "distribution", distribution)
        return dist

    return install
