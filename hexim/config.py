"""Persistent JSON config helpers.

Stores the UI theme preference and the terminal geometry used when the real
size cannot be queried. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .terminal import FALLBACK_SIZE

logger = logging.getLogger(__name__)

APP_NAME = "hexim"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; a config that cannot
    be written never stops the editor.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) and value else None


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = name
    save_config(config)


def _positive_int_or(value: object, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_fallback_size() -> tuple[int, int]:
    """Return ``(columns, lines)`` to use when the terminal cannot be queried."""
    config = load_config()
    return (
        _positive_int_or(config.get("fallback_columns"), FALLBACK_SIZE[0]),
        _positive_int_or(config.get("fallback_rows"), FALLBACK_SIZE[1]),
    )
