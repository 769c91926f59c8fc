"""
Runtime settings for versioncheck.

Values come from VERSIONCHECK_* environment variables (optionally loaded
from .env by load_env()); CLI flags override them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .reporter import DEFAULT_PLACEHOLDER
from .runtime import DEFAULT_SOURCE, SOURCES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    deployment_id: Optional[str] = None
    source: str = DEFAULT_SOURCE
    placeholder: str = DEFAULT_PLACEHOLDER
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    def __post_init__(self):
        if self.source not in SOURCES:
            raise ValueError(
                f"Unsupported runtime source '{self.source}'. Use one of: {', '.join(sorted(SOURCES))}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level '{self.log_level}'. Use one of: {', '.join(LOG_LEVELS)}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        log_dir = env.get("VERSIONCHECK_LOG_DIR") or None
        return cls(
            deployment_id=env.get("VERSIONCHECK_DEPLOYMENT_ID") or None,
            source=env.get("VERSIONCHECK_SOURCE") or DEFAULT_SOURCE,
            placeholder=env.get("VERSIONCHECK_PLACEHOLDER") or DEFAULT_PLACEHOLDER,
            log_level=(env.get("VERSIONCHECK_LOG_LEVEL") or "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )
