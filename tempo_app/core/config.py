"""Central configuration, constants, and user settings loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

import pytz
import yaml

logger = logging.getLogger(__name__)

APP_NAME = "tempo-app"

# =============================================================================
# Tempo Connection Settings
# =============================================================================
TEMPO_DEFAULT_SERVER = "https://api.tempo.io/core/3"
DEFAULT_PAGE_SIZE: int = 1000
DEFAULT_CACHE_TTL: float = 300.0  # seconds

# Daily view fetches worklogs and schedule side by side
SCHEDULE_FETCH_MAX_WORKERS = 2

# =============================================================================
# Date / Time Formats
# All dates crossing the Tempo boundary use these textual representations.
# =============================================================================
DATE_FORMAT = "%Y-%m-%d"
START_TIME_FORMAT = "%H:%M:%S"
DATE_FORMAT_HINT = "YYYY-MM-DD"

# =============================================================================
# Relative "when" literals
# =============================================================================
YESTERDAY_LITERALS: frozenset[str] = frozenset({"y", "yesterday"})
TODAY_LITERALS: tuple[str, ...] = ("t", "today")

# =============================================================================
# Settings file / environment
# =============================================================================
CONFIG_PATH_ENV = "TEMPO_APP_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.tempo_app.yaml")

ENV_OVERRIDES: dict[str, str] = {
    "TEMPO_API_TOKEN": "tempo_token",
    "TEMPO_ACCOUNT_ID": "account_id",
    "TEMPO_SERVER": "tempo_server",
    "TEMPO_TIMEZONE": "timezone",
}


@dataclass(slots=True, frozen=True)
class AppSettings:
    tempo_token: str | None = None
    account_id: str | None = None
    tempo_server: str = TEMPO_DEFAULT_SERVER
    timezone: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    cache_ttl: float = DEFAULT_CACHE_TTL


_CACHE: AppSettings | None = None


def config_path() -> Path:
    env = os.environ.get(CONFIG_PATH_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _read_yaml_section(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get("tempo", data)
    return section if isinstance(section, dict) else {}


def load_settings(path: str | Path | None = None, *, refresh: bool = False) -> AppSettings:
    """Load settings from the YAML file, then apply environment overrides.

    The file is optional. Keys may live under a top-level ``tempo:`` section or
    at the root. Environment variables listed in ``ENV_OVERRIDES`` win over the
    file. The result of the default lookup is cached for the process.
    """
    global _CACHE
    if path is None and _CACHE is not None and not refresh:
        return _CACHE

    section = _read_yaml_section(Path(path).expanduser() if path else config_path())
    values: dict = {}
    for name in ("tempo_token", "account_id", "tempo_server", "timezone"):
        raw = section.get(name)
        if raw:
            values[name] = str(raw)
    if section.get("page_size"):
        values["page_size"] = int(section["page_size"])
    if section.get("cache_ttl"):
        values["cache_ttl"] = float(section["cache_ttl"])
    for env_name, field_name in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            values[field_name] = env_value

    settings = replace(AppSettings(), **values)
    if path is None:
        _CACHE = settings
    return settings


def local_now(settings: AppSettings | None = None) -> datetime:
    """Current wall-clock time (naive) in the configured timezone."""
    tz_name = settings.timezone if settings else None
    if not tz_name:
        return datetime.now()
    tz = pytz.timezone(tz_name)
    return datetime.now(tz=tz).replace(tzinfo=None)
