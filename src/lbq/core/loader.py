"""Load the user's commands file and build a registry from it.

The commands file is a plain Python module that defines
``install(register)``.  It is imported under a private module name, never
from ``sys.path``, so it can live anywhere.
"""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .._util.fs import ensure_dir
from .._util.logging_utils import _log_debug
from .errors import ConfigError
from .registry import Registry, define_config

USER_MODULE_NAME = "lbq_user_commands"

COMMANDS_TEMPLATE = '''\
"""lbq commands.

``install`` receives ``register``.  Call it with the patterns to match
followed by the handler and an optional description:

    register(pattern, ..., handler, "description")

A pattern is a string (matched case-insensitively) or a compiled regular
expression.  The handler receives one list of captured groups per pattern,
then any leftover arguments.  If several actions match, the one with the
most patterns wins; among equals the first registered wins.
"""

import random
import re


def install(register):
    register("hello", lambda m: print("Hello, world!"), "Say hello")

    # Regular expressions capture groups: m[0] is the whole match.
    register(
        re.compile(r"^\\.r(\\d+)$"),
        lambda m: print(random.randrange(int(m[1]))),
        "Random number below N, e.g. .r6",
    )

    # Multiple patterns; the longest match wins over "hello" alone.
    register("hello", re.compile(r".+"), lambda _, m: print(f"Hello, {m[0]}!"))

    # Leftover arguments are passed after the captures.
    register("echo", lambda _, *args: print(" ".join(args)), "Print the arguments")
'''


def init_commands_file(path: Path) -> bool:
    """Create a starter commands file at *path* unless one exists.

    Returns True if the file was created.
    """
    if path.exists():
        return False
    ensure_dir(path.parent)
    path.write_text(COMMANDS_TEMPLATE, encoding="utf-8")
    _log_debug(f"init_commands_file: created {path}")
    return True


def load_install(path: Path) -> Callable[..., Any]:
    """Import the commands file at *path* and return its ``install`` callable.

    Raises:
        ConfigError: the file is missing, fails to import, or has no callable
            ``install``.
    """
    if not path.is_file():
        raise ConfigError(f"No valid configuration found in {path}", path)

    spec = importlib.util.spec_from_file_location(USER_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"No valid configuration found in {path}", path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[USER_MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(USER_MODULE_NAME, None)
        _log_debug(f"load_install: import of {path} failed: {e!r}")
        raise ConfigError(f"No valid configuration found in {path}", path) from e

    install = getattr(module, "install", None)
    if not callable(install):
        raise ConfigError(f"No valid configuration found in {path}", path)
    _log_debug(f"load_install: loaded {path}")
    return install


def load_registry(path: Path) -> Registry:
    """Load the commands file and run its ``install`` against a fresh registry."""
    registry = define_config(load_install(path))
    _log_debug(f"load_registry: {len(registry)} action(s) registered from {path}")
    return registry
