"""JSON-based preference persistence for the date picker.

Only preferences are stored; the selection itself never is.
"""

import json
import os

from selection_mode import SelectionMode

_DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".date-picker-settings.json")

_DEFAULTS = {
    "locale": "en_US",
    "selection_mode": SelectionMode.SINGLE.value,
    "max_selections": None,
    "months_ahead": 24,
}

_MODES = {m.value for m in SelectionMode}


def settings_path() -> str:
    """Settings file location, overridable via ``DATE_PICKER_SETTINGS``."""
    return os.environ.get("DATE_PICKER_SETTINGS", _DEFAULT_PATH)


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing or bad keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(settings_path(), "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings

    if isinstance(stored.get("locale"), str) and stored["locale"]:
        settings["locale"] = stored["locale"]
    if stored.get("selection_mode") in _MODES:
        settings["selection_mode"] = stored["selection_mode"]
    max_sel = stored.get("max_selections")
    if isinstance(max_sel, int) and not isinstance(max_sel, bool) and max_sel >= 1:
        settings["max_selections"] = max_sel
    months = stored.get("months_ahead")
    if isinstance(months, int) and not isinstance(months, bool) and months >= 1:
        settings["months_ahead"] = months
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(settings_path(), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
