"""lbq package: a personal command-line task runner.

Modules:
- lbq.core: Patterns, actions, the registry/dispatcher, config and loader
- lbq.cli: CLI entry point package (lbq)
- lbq.ui: Editor launcher
- lbq._util: Internal helpers (ANSI colors, fs, debug log)
"""

from .core.actions import Action, ActionDefinition
from .core.errors import ConfigError, InvalidRegistrationError, LbqError
from .core.patterns import Literal, Regex
from .core.registry import (
    Dispatch,
    Registry,
    adefine_config,
    ainvoke,
    define_config,
    invoke,
)

__all__ = [
    "Action",
    "ActionDefinition",
    "ConfigError",
    "Dispatch",
    "InvalidRegistrationError",
    "LbqError",
    "Literal",
    "Regex",
    "Registry",
    "adefine_config",
    "ainvoke",
    "define_config",
    "invoke",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("lbq")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["project"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
