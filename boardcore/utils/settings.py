"""Environment-driven settings for the repository layer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict


@dataclass(frozen=True)
class SettingDefinition:
    env_var: str
    default: int


_INT_SETTING_DEFINITIONS: Dict[str, SettingDefinition] = {
    "presence_window_minutes": SettingDefinition("PRESENCE_WINDOW_MINUTES", 10),
    "default_items_per_page": SettingDefinition("DEFAULT_ITEMS_PER_PAGE", 20),
}


@dataclass(frozen=True)
class Settings:
    presence_window_minutes: int
    default_items_per_page: int
    log_level: str


def _normalize_positive_int(value: str | None, default: int) -> int:
    """Return a positive int from an environment-style value, else the default."""
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _normalize_log_level(value: str | None) -> str:
    name = (value or "INFO").strip().upper()
    if not isinstance(getattr(logging, name, None), int):
        return "INFO"
    return name


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings sourced from the environment."""
    values = {
        key: _normalize_positive_int(os.getenv(definition.env_var), definition.default)
        for key, definition in _INT_SETTING_DEFINITIONS.items()
    }
    return Settings(log_level=_normalize_log_level(os.getenv("LOG_LEVEL")), **values)


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
