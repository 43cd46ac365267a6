#!/usr/bin/env python3

import argparse
import os
import sys

from rich.console import Console

import lbq

from .._util.ansi import (
    gray as _gray,
    supports_color as _supports_color,
    violet as _violet,
    yes_no as _yes_no,
)
from .._util.fs import tildify
from .._util.logging_utils import _log_debug
from ..core.config import (
    commands_file as _commands_file,
    commands_file_candidates as _commands_file_candidates,
    settings_path as _settings_path,
    settings_search_paths as _settings_search_paths,
)
from ..core.errors import LbqError
from ..core.loader import init_commands_file, load_registry
from ..core.registry import Registry, invoke
from ..core.version import format_version_string, get_version_info
from ..ui.editor import open_in_editor

# Meta options are only recognized when they are the sole argument; anything
# else is handed to the dispatcher untouched.
META_OPTIONS = frozenset(
    {"-h", "--help", "-v", "-V", "--version", "--edit", "--location", "-l", "--list", "--config"}
)


def _build_parser(version_string: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lbq",
        usage="lbq [--edit|--location|--list|--config] command...",
        description="lbq – run your own commands, matched from a Python commands file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Quick start:\n"
            "  1. Create:  lbq --edit          (writes a starter commands file)\n"
            "  2. Inspect: lbq --list\n"
            "  3. Run:     lbq hello world\n"
            "\n"
            "The action with the most matching patterns wins; among equals the\n"
            "first registered one. Leftover arguments are passed to the handler.\n"
        ),
    )
    parser.add_argument("-v", "-V", "--version", action="version", version=f"lbq {version_string}")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--edit", action="store_true", help="Open the commands file in your editor"
    )
    group.add_argument(
        "--location", action="store_true", help="Print the path to the commands file"
    )
    group.add_argument("-l", "--list", action="store_true", help="List all available actions")
    group.add_argument(
        "--config", action="store_true", help="Show settings and commands file locations"
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Arguments matched against the registered actions",
    )
    return parser


def _cmd_edit() -> None:
    path = _commands_file()
    if init_commands_file(path):
        print(f"Created {tildify(path)}, edit it to register commands.")
    if not open_in_editor(path):
        raise SystemExit(f"Could not open an editor for {path}")


def _cmd_list() -> None:
    registry = _load()
    color_enabled = _supports_color()
    print("Available actions:")
    for line in registry.list(lambda label: _violet(label, color_enabled)):
        print(f"  {line}")


def _print_config() -> None:
    """Display settings and commands file locations."""
    color_enabled = _supports_color()
    print("Settings (read):")
    spath = _settings_path()
    print(
        f"- Settings file: {_gray(str(spath), color_enabled)} "
        f"(exists: {_yes_no(spath.is_file(), color_enabled)})"
    )
    print("- Settings search order:")
    for p in _settings_search_paths():
        print(f"  • {_gray(str(p), color_enabled)} (exists: {_yes_no(p.is_file(), color_enabled)})")

    print("Commands (read):")
    cpath = _commands_file()
    print(
        f"- Commands file: {_gray(str(cpath), color_enabled)} "
        f"(exists: {_yes_no(cpath.is_file(), color_enabled)})"
    )
    print("- Commands search order:")
    for p in _commands_file_candidates():
        print(f"  • {_gray(str(p), color_enabled)} (exists: {_yes_no(p.is_file(), color_enabled)})")

    print("Environment overrides (if set):")
    for var in (
        "LBQ_CONFIG_FILE",
        "LBQ_SETTINGS_FILE",
        "LBQ_CONFIG_DIR",
        "LBQ_STATE_DIR",
        "XDG_CONFIG_HOME",
        "EDITOR",
    ):
        val = os.environ.get(var)
        if val is not None:
            print(f"- {var}={_gray(val, color_enabled)}")


def _load() -> Registry:
    path = _commands_file()
    try:
        return load_registry(path)
    except LbqError as e:
        _log_debug(f"cli: invalid configuration in {path}: {e}")
        raise SystemExit(f"Error: {e}\nRun 'lbq --edit' to create or fix {tildify(path)}.")


def _report_handler_error() -> None:
    """Print the active exception with lbq's own frames hidden."""
    console = Console(stderr=True)
    console.print_exception(suppress=[lbq], show_locals=False)


def _dispatch(args: list[str]) -> None:
    registry = _load()
    found = registry.find(args)
    if found is None:
        _log_debug(f"cli: no match for {args!r}")
        raise SystemExit(
            "No matching action found for the given arguments. Use --list to list all actions."
        )

    _log_debug(f"cli: dispatching {found.action.label!r} with rest={found.rest!r}")
    try:
        result = invoke(found)
    except Exception:
        _report_handler_error()
        raise SystemExit(1)
    if result is not None:
        print("=>", result)


def main(argv: list[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)

    version, revision = get_version_info()
    parser = _build_parser(format_version_string(version, revision))

    if not args:
        parser.print_help()
        return

    if len(args) > 1 or args[0] not in META_OPTIONS:
        _dispatch(args)
        return

    # -h and --version print and exit inside argparse
    ns = parser.parse_args(args)
    if ns.edit:
        _cmd_edit()
    elif ns.location:
        print(_commands_file())
    elif ns.list:
        _cmd_list()
    elif ns.config:
        _print_config()


if __name__ == "__main__":
    main()
