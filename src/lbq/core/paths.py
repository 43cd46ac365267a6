# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for config and state directories."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "lbq"


def config_root() -> Path:
    """
    Base directory for configuration (commands.py, config.yml).

    Priority:
      1. LBQ_CONFIG_DIR
      2. platform config dir (``~/.config/lbq`` on Linux,
         ``~/Library/Application Support/lbq`` on macOS,
         ``%LOCALAPPDATA%\\lbq`` on Windows)
    """
    env = os.getenv("LBQ_CONFIG_DIR")
    if env:
        return Path(env).expanduser()
    return Path(user_config_dir(APP_NAME, appauthor=False))


def state_root() -> Path:
    """
    Writable state (debug log).

    Priority:
      1. LBQ_STATE_DIR
      2. ${XDG_DATA_HOME:-~/.local/share}/lbq (platform equivalent elsewhere)
    """
    env = os.getenv("LBQ_STATE_DIR")
    if env:
        return Path(env).expanduser()
    return Path(user_data_dir(APP_NAME, appauthor=False))
