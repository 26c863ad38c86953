"""Runtime configuration.

External program names and the seen-URL list come from ``SFEED_*``
environment variables, read once at startup. UI toggles that should survive
restarts (mouse reporting, new-only sidebar filter) live in a small JSON file.
A missing or malformed file falls back to defaults; write failures are logged
and otherwise ignored.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "feedviewer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_PLUMBER = "xdg-open"
DEFAULT_PIPER = "less"
DEFAULT_YANKER = "xclip -r"
DEFAULT_MARK_READ = "sfeed_markread read"
DEFAULT_MARK_UNREAD = "sfeed_markread unread"


@dataclass(frozen=True)
class ViewerSettings:
    """External collaborators and loading mode."""

    plumber: str = DEFAULT_PLUMBER
    piper: str = DEFAULT_PIPER
    yanker: str = DEFAULT_YANKER
    mark_read_command: str = DEFAULT_MARK_READ
    mark_unread_command: str = DEFAULT_MARK_UNREAD
    url_file: str | None = None
    lazy_load: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> ViewerSettings:
        """Read overrides; empty variables count as unset."""
        env = os.environ if environ is None else environ

        def pick(name: str, default: str) -> str:
            value = env.get(name, "").strip()
            return value or default

        return cls(
            plumber=pick("SFEED_PLUMBER", DEFAULT_PLUMBER),
            piper=pick("SFEED_PIPER", DEFAULT_PIPER),
            yanker=pick("SFEED_YANKER", DEFAULT_YANKER),
            mark_read_command=pick("SFEED_MARK_READ", DEFAULT_MARK_READ),
            mark_unread_command=pick("SFEED_MARK_UNREAD", DEFAULT_MARK_UNREAD),
            url_file=env.get("SFEED_URL_FILE") or None,
            lazy_load=env.get("SFEED_LAZYLOAD", "") == "1",
        )


@dataclass
class Preferences:
    mouse: bool = True
    only_new: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write errors."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot save config %s: %s", CONFIG_PATH, exc)


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_preferences() -> Preferences:
    """Load persisted UI toggles; only explicit booleans are accepted."""
    data = load_config()
    defaults = Preferences()
    return Preferences(
        mouse=_load_bool(data, "mouse", defaults.mouse),
        only_new=_load_bool(data, "only_new", defaults.only_new),
    )


def save_preferences(preferences: Preferences) -> None:
    config = load_config()
    config["mouse"] = bool(preferences.mouse)
    config["only_new"] = bool(preferences.only_new)
    save_config(config)
