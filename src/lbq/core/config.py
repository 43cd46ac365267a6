import os
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import config_root

COMMANDS_FILE_NAME = "commands.py"
SETTINGS_FILE_NAME = "config.yml"

# ---------- Settings file ----------


def _xdg_config_dir() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    return (Path(xdg_home) if xdg_home else Path.home() / ".config") / "lbq"


def _dedupe(paths: list[Path]) -> list[Path]:
    seen: set[Path] = set()
    out: list[Path] = []
    for p in paths:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return out


def settings_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for settings.

    Behavior matches settings_path():
    - If LBQ_SETTINGS_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) ${XDG_CONFIG_HOME:-~/.config}/lbq/config.yml
        2) config_root()/config.yml (platform config dir or LBQ_CONFIG_DIR)
    """
    env_file = os.environ.get("LBQ_SETTINGS_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]
    return _dedupe([_xdg_config_dir() / SETTINGS_FILE_NAME, config_root() / SETTINGS_FILE_NAME])


def settings_path() -> Path:
    """Settings file path (first existing search path, else the first one).

    An explicit LBQ_SETTINGS_FILE is returned even if missing so the user can
    see where lbq is looking.
    """
    candidates = settings_search_paths()
    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[0]


def load_settings() -> dict[str, Any]:
    cfg_path = settings_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    return data if isinstance(data, dict) else {}


def get_settings_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the settings, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``editor: vim``),
    returns ``{}`` so callers can rely on ``.get()``.
    """
    value = load_settings().get(key, {})
    if not isinstance(value, dict):
        return {}
    return value


def _settings_value(section: str, key: str) -> Any:
    try:
        return get_settings_section(section).get(key)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return None


# ---------- Commands file ----------


def commands_file_candidates() -> list[Path]:
    """Return the ordered list of locations checked for the commands file.

    - If LBQ_CONFIG_FILE is set, only that path is considered.
    - If the settings define ``paths.commands_file``, only that path is considered.
    - Otherwise: config_root()/commands.py, then ~/.config/lbq/commands.py.
    """
    env_file = os.environ.get("LBQ_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser()]

    configured = _settings_value("paths", "commands_file")
    if configured:
        return [Path(str(configured)).expanduser()]

    return _dedupe(
        [
            config_root() / COMMANDS_FILE_NAME,
            Path.home() / ".config" / "lbq" / COMMANDS_FILE_NAME,
        ]
    )


def commands_file() -> Path:
    """Path to the user's commands file.

    Returns the first existing candidate, or the first candidate when none
    exists yet (that is where ``lbq --edit`` creates it).
    """
    candidates = commands_file_candidates()
    for c in candidates:
        if c.is_file():
            return c
    return candidates[0]


# ---------- Editor ----------


def get_editor_command() -> str | None:
    """Return ``editor.command`` from the settings, or None if not set."""
    value = _settings_value("editor", "command")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
