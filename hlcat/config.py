"""Persistent JSON config helpers.

Stores default theme, tab width, and color/wrap modes.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "hlcat"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

MODE_CHOICES = ("auto", "never", "always")
WRAP_CHOICES = ("auto", "never", "character")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("config %s not loaded: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _load_choice(key: str, choices: tuple[str, ...]) -> str | None:
    value = load_config().get(key)
    if isinstance(value, str) and value in choices:
        return value
    return None


def load_theme_name() -> str | None:
    """Load persisted theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_defaults(values: dict[str, object]) -> dict[str, object]:
    """Merge non-``None`` entries of ``values`` into the persisted config.

    Returns the config as written.
    """
    config = load_config()
    config.update({key: value for key, value in values.items() if value is not None})
    save_config(config)
    return config


def load_tab_width() -> int | None:
    """Load persisted tab width; booleans and values below 1 are ignored."""
    value = load_config().get("tabs")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


def load_color_mode() -> str | None:
    return _load_choice("color", MODE_CHOICES)


def load_wrap_mode() -> str | None:
    return _load_choice("wrap", WRAP_CHOICES)
