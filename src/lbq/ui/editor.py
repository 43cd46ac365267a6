"""Utility to open the commands file in the user's preferred editor."""

import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

from ..core.config import get_editor_command


def open_in_editor(file_path: Path) -> bool:
    """Open *file_path* in the user's preferred editor (blocking).

    Editor resolution order:
      1. ``editor.command`` in the lbq settings file
      2. ``$EDITOR`` environment variable
      3. ``nano``
      4. ``vi``

    Returns ``True`` if the editor exited successfully, ``False`` if no
    usable editor was found (a message is printed to stderr in that case)
    or the editor failed.
    """
    editor = _resolve_editor()
    if editor is None:
        print(
            "No editor found. Set editor.command in the lbq settings, the EDITOR "
            "environment variable, or install nano/vi.",
            file=sys.stderr,
        )
        return False

    try:
        # Handle editors with arguments (e.g., "code --wait")
        cmd = shlex.split(editor) + [str(file_path)]
        subprocess.run(cmd, check=True)  # noqa: S603
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False
    return True


def _usable(command: str) -> bool:
    # Only validate the first token (the actual command)
    parts = shlex.split(command)
    return bool(parts) and shutil.which(parts[0]) is not None


def _resolve_editor() -> str | None:
    """Return the first available editor command, or *None*."""
    configured = get_editor_command()
    if configured and _usable(configured):
        return configured

    env_editor = os.environ.get("EDITOR", "").strip()
    if env_editor and _usable(env_editor):
        return env_editor

    for fallback in ("nano", "vi"):
        if shutil.which(fallback):
            return fallback

    return None
