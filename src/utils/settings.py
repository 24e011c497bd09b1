"""Runtime configuration loaded from the environment."""
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Dict

DEFAULT_API_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_API_TIMEOUT = 5.0
DEFAULT_CACHE_DIR = "data"

_SETTING_KEYS = {"ROSTER_API_URL", "ROSTER_API_TIMEOUT", "ROSTER_CACHE_DIR"}

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class Settings:
    """Roster application settings."""

    api_url: str = DEFAULT_API_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    cache_dir: str = DEFAULT_CACHE_DIR


def read_env_file(env_path: Path) -> Dict[str, str]:
    """
    Parse KEY=VALUE lines from a .env file.

    Blank lines, comments and lines without "=" are skipped; surrounding
    quotes are removed from values. A missing file yields an empty dict.
    """
    if not env_path.exists():
        return {}

    values = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        values[key] = value.strip("\"'")
    return values


def _load_env_file(env_path: Path = Path(".env")) -> None:
    """Seed roster settings from .env once per process. Real environment wins."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return
        for key, value in read_env_file(env_path).items():
            if key in _SETTING_KEYS:
                os.environ.setdefault(key, value)
        _ENV_LOADED = True


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_API_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_API_TIMEOUT


def get_settings() -> Settings:
    """
    Build settings from environment variables.

    Environment:
        ROSTER_API_URL: Base URL of the remote roster store
        ROSTER_API_TIMEOUT: Request timeout in seconds
        ROSTER_CACHE_DIR: Directory holding the local roster cache
    """
    _load_env_file()

    return Settings(
        api_url=os.getenv("ROSTER_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_timeout=_parse_timeout(os.getenv("ROSTER_API_TIMEOUT", str(DEFAULT_API_TIMEOUT))),
        cache_dir=os.getenv("ROSTER_CACHE_DIR", DEFAULT_CACHE_DIR),
    )
