"""In-memory cache for resolver settings."""

from __future__ import annotations

import os
import threading
from typing import Any

from utils.file_utils import load_json
from utils.log_utils import tprint

DEFAULT_SETTINGS_PATH = "config/app_settings.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "log_level": "INFO",
    "tab_match_threshold": 30,
    "search_engine_url": "https://www.google.com/search?q={query}",
    "block_private_hosts": False,
    "playwright_profile_dir": "user_data/playwright_profile",
    "playwright_headless": False,
    "playwright_cdp_url": None,
    "navigation_timeout_ms": 30000,
}

_lock = threading.Lock()
_settings_cache: dict[str, Any] = {}


def settings_path() -> str:
    return os.getenv("VOICE_NAV_SETTINGS", DEFAULT_SETTINGS_PATH)


def refresh_settings() -> dict[str, Any]:
    """Reload settings from disk and replace the cache."""
    data = load_json(settings_path())
    merged = dict(DEFAULT_SETTINGS)
    merged.update(data)
    with _lock:
        _settings_cache.clear()
        _settings_cache.update(merged)
        return dict(_settings_cache)


def get_settings() -> dict[str, Any]:
    """Return a copy of the cached settings."""
    with _lock:
        cached = dict(_settings_cache)
    if not cached:
        return refresh_settings()
    return cached


def is_deep_logging() -> bool:
    """Return True when log_level requests deep tracing."""
    level = str(get_settings().get("log_level", "")).upper()
    return level in {"DEEP"}


def deep_log(message: str) -> None:
    """Emit a trace line only when deep logging is on."""
    if is_deep_logging():
        tprint(message)
