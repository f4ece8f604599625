"""JSON-based settings persistence for the date range picker."""

import json
import logging
import os
from datetime import date

from eligibility import EligibilityConstraints
from formatting import OUTPUT_STYLES

logger = logging.getLogger(__name__)

_ENV_PATH = "DATE_RANGE_PICKER_SETTINGS"
_DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".date-range-picker-settings.json")

_DEFAULTS = {
    "limit_months": False,
    "allow_past": False,
    "number_of_allowed_months": 0,
    "default_date": None,
    "output_style": "dotted",
    "last_selection": "",
}


def settings_path() -> str:
    return os.environ.get(_ENV_PATH) or _DEFAULT_PATH


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    path = settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return settings

    for key in ("limit_months", "allow_past"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    n = stored.get("number_of_allowed_months")
    # bool is an int subclass
    if isinstance(n, int) and not isinstance(n, bool):
        if n >= 0:
            settings["number_of_allowed_months"] = n
        else:
            logger.warning("Dropping negative number_of_allowed_months: %d", n)
    raw_default = stored.get("default_date")
    if isinstance(raw_default, str):
        try:
            date.fromisoformat(raw_default)
        except ValueError:
            logger.warning("Dropping unparseable default_date: %r", raw_default)
        else:
            settings["default_date"] = raw_default
    if stored.get("output_style") in OUTPUT_STYLES:
        settings["output_style"] = stored["output_style"]
    if isinstance(stored.get("last_selection"), str):
        settings["last_selection"] = stored["last_selection"]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(settings_path(), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def constraints_from_settings(settings: dict, today: date) -> EligibilityConstraints:
    return EligibilityConstraints(
        today=today,
        limit_months=settings["limit_months"],
        allow_past=settings["allow_past"],
        number_of_allowed_months=settings["number_of_allowed_months"],
    )


def default_date_from_settings(settings: dict) -> date | None:
    raw = settings.get("default_date")
    return date.fromisoformat(raw) if raw else None
