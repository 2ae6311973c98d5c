# SPDX-License-Identifier: MIT
"""Configuration reader for the report viewer.

Settings live in a single JSON file and are addressed with dot-notation
keys such as ``reportViewer.refreshIntervalSeconds``. A missing or broken
file is never fatal: every reader falls back to its default.
"""
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from freshness.models import (
    DEFAULT_DEMO_PARAM,
    DEFAULT_LOCALE,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    Locale,
)
from freshness.paths import PathResolver


def get_settings_path() -> Path:
    """Get path to the viewer's settings.json.

    Returns:
        Path to settings.json, respecting REPORT_VIEWER_SETTINGS env var.
    """
    custom = os.environ.get("REPORT_VIEWER_SETTINGS")
    if custom:
        return Path(custom)
    return PathResolver.config_dir() / "settings.json"


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value by dot-notation key.

    Args:
        key: Dot-notation key like "reportViewer.debugLevel"
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings_path = get_settings_path()

    if not settings_path.exists():
        return default

    try:
        with open(settings_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError):
        return default

    parts = key.split(".")
    current = data
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]

    return current


def get_bool_setting(key: str, default: bool = False) -> bool:
    """Get a boolean setting.

    Converts string "true", "1", "yes" to True.
    """
    value = get_setting(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def get_int_setting(key: str, default: int = 0) -> int:
    """Get an integer setting, or default if conversion fails."""
    value = get_setting(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_float_setting(key: str, default: float = 0.0) -> float:
    """Get a numeric setting without truncating fractions.

    Booleans and non-numeric strings give the default.
    """
    value = get_setting(key, default)
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class ViewerSettings:
    """Resolved settings for one viewer launch."""

    refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    refresh_on_focus: bool = False
    reload_on_restore: bool = False
    default_locale: Locale = DEFAULT_LOCALE
    demo_param: str = DEFAULT_DEMO_PARAM

    @classmethod
    def load(cls) -> "ViewerSettings":
        """Read all viewer settings from settings.json."""
        interval = get_float_setting(
            "reportViewer.refreshIntervalSeconds", DEFAULT_REFRESH_INTERVAL_SECONDS
        )
        if not interval > 0:
            interval = DEFAULT_REFRESH_INTERVAL_SECONDS

        locale_code = get_setting("reportViewer.defaultLocale", DEFAULT_LOCALE.value)
        try:
            locale = Locale(locale_code)
        except ValueError:
            locale = DEFAULT_LOCALE

        demo_param = get_setting("reportViewer.demoParam", DEFAULT_DEMO_PARAM)
        if not isinstance(demo_param, str) or not demo_param:
            demo_param = DEFAULT_DEMO_PARAM

        return cls(
            refresh_interval=interval,
            refresh_on_focus=get_bool_setting("reportViewer.refreshOnFocus", False),
            reload_on_restore=get_bool_setting("reportViewer.reloadOnRestore", False),
            default_locale=locale,
            demo_param=demo_param,
        )
