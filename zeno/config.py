"""Persistent JSON config plus environment-driven settings.

The JSON file stores UI preferences (highlight style, theme, list pane width)
and optional database/log overrides. Environment variables carry database
credentials and feature switches. All file access is defensive: malformed or
missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote_plus

from platformdirs import user_config_dir, user_log_dir

logger = logging.getLogger(__name__)

APP_NAME = "zeno"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "zeno.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_DB_ENV: dict[str, str] = {
    "ZENODB_USER": "zeno_user",
    "ZENODB_PASS": "secret",
    "ZENODB_HOST": "127.0.0.1",
    "ZENODB_PORT": "3306",
    "ZENODB_NAME": "zeno",
}


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

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(data: dict[str, object], key: str) -> str | None:
    """Return a stripped non-empty string config value, else ``None``."""
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_list_pane_percent() -> float | None:
    """Read the list pane width percentage constrained to the open interval (0, 100)."""
    value = load_config().get("list_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_ui_preferences(style: str | None = None, theme: str | None = None) -> None:
    """Persist explicitly chosen highlight style and UI theme names."""
    updates = {
        key: value.strip()
        for key, value in (("style", style), ("theme", theme))
        if isinstance(value, str) and value.strip()
    }
    if not updates:
        return
    config = load_config()
    config.update(updates)
    save_config(config)


def database_url_from_env(environ: dict[str, str] | None = None) -> str:
    """Build the store URL from ``ZENODB_URL`` or the ``ZENODB_*`` parts."""
    env = os.environ if environ is None else environ
    explicit = env.get("ZENODB_URL", "").strip()
    if explicit:
        return explicit

    def part(name: str) -> str:
        return env.get(name) or DEFAULT_DB_ENV[name]

    return (
        f"mysql+pymysql://{quote_plus(part('ZENODB_USER'))}:{quote_plus(part('ZENODB_PASS'))}"
        f"@{part('ZENODB_HOST')}:{part('ZENODB_PORT')}/{part('ZENODB_NAME')}?charset=utf8mb4"
    )


def _env_flag(env: dict[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one CLI invocation."""

    database_url: str
    style: str = DEFAULT_STYLE
    theme: str | None = None
    no_color: bool = False
    ai_enabled: bool = True
    list_pane_fraction: float | None = None
    log_file: Path = DEFAULT_LOG_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(
    *,
    style: str | None = None,
    theme: str | None = None,
    no_color: bool = False,
    no_ai: bool = False,
    log_file: str | None = None,
    log_level: str | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Resolve settings with precedence CLI flag > environment > config file > default."""
    env = dict(os.environ if environ is None else environ)
    data = load_config()

    if env.get("ZENODB_URL", "").strip() or any(env.get(name) for name in DEFAULT_DB_ENV):
        database_url = database_url_from_env(env)
    else:
        database_url = _load_string(data, "database_url") or database_url_from_env(env)

    percent = load_list_pane_percent()
    resolved_log_file = log_file or _load_string(data, "log_file")
    resolved_level = (
        log_level
        or env.get("ZENO_LOG_LEVEL", "").strip()
        or _load_string(data, "log_level")
        or DEFAULT_LOG_LEVEL
    )

    return Settings(
        database_url=database_url,
        style=style or _load_string(data, "style") or DEFAULT_STYLE,
        theme=theme or _load_string(data, "theme"),
        no_color=no_color or bool(env.get("NO_COLOR")),
        ai_enabled=not (no_ai or _env_flag(env, "ZENO_NO_AI")),
        list_pane_fraction=None if percent is None else percent / 100.0,
        log_file=Path(resolved_log_file).expanduser() if resolved_log_file else DEFAULT_LOG_PATH,
        log_level=resolved_level.upper(),
    )
