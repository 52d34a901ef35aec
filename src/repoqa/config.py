"""
Runtime configuration for repoqa.

Settings are read from environment variables. `run.py` loads a `.env`
file first, so values there apply too.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_REPOS_DIR = ".repos"
DEFAULT_CLONE_TIMEOUT = 300  # seconds
DEFAULT_SEARCH_TIMEOUT = 30  # seconds
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, got {value}, using {default}")
        return default
    return value


@dataclass
class Settings:
    """Service settings"""
    repos_dir: Path = field(default_factory=lambda: Path(DEFAULT_REPOS_DIR))
    clone_timeout: int = DEFAULT_CLONE_TIMEOUT
    search_timeout: int = DEFAULT_SEARCH_TIMEOUT
    working_dir: Path = field(default_factory=Path.cwd)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from REPOQA_* environment variables."""
        working_dir = os.getenv("REPOQA_WORKING_DIR")
        return cls(
            repos_dir=Path(os.getenv("REPOQA_REPOS_DIR", DEFAULT_REPOS_DIR)).expanduser().resolve(),
            clone_timeout=_int_from_env("REPOQA_CLONE_TIMEOUT", DEFAULT_CLONE_TIMEOUT),
            search_timeout=_int_from_env("REPOQA_SEARCH_TIMEOUT", DEFAULT_SEARCH_TIMEOUT),
            working_dir=Path(working_dir).expanduser().resolve() if working_dir else Path.cwd(),
            host=os.getenv("REPOQA_HOST", DEFAULT_HOST),
            port=_int_from_env("REPOQA_PORT", DEFAULT_PORT),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings

    if _settings is None:
        _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Forget cached settings (used by tests after changing the environment)."""
    global _settings
    _settings = None
