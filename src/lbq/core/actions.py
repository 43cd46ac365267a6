# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Actions and the resolution of ``register()`` call shapes.

``register()`` accepts four shapes:

1. a definition (``ActionDefinition`` or a mapping with ``pattern``, ``run``
   and optionally ``description``),
2. ``(pattern, run[, description])``,
3. ``(pattern1, pattern2, ..., run[, description])``,
4. ``(run[, description])`` for a catch-all action with no patterns.

Every shape is first classified into an :class:`ActionDefinition`, which is
the single record :func:`build_action` turns into an :class:`Action`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import InvalidRegistrationError
from .patterns import Pattern, as_pattern, is_pattern_like

Handler = Callable[..., Any]
PatternInput = Any  # str | re.Pattern | Literal | Regex, or a sequence of those


@dataclass(frozen=True)
class Action:
    """A registered command: patterns matched against argv, a handler and a description."""

    patterns: tuple[Pattern, ...]
    run: Handler
    description: str

    @property
    def length(self) -> int:
        return len(self.patterns)

    @property
    def label(self) -> str:
        """Human-readable pattern sequence used by listings."""
        return " ".join(p.label for p in self.patterns)

    def match(self, argv: Sequence[str]) -> list[list[str | None]] | None:
        """Match ``argv[:length]`` and return one captured-groups list per pattern."""
        captures: list[list[str | None]] = []
        for i, pattern in enumerate(self.patterns):
            token = argv[i] if i < len(argv) else None
            groups = pattern.match(token)
            if groups is None:
                return None
            captures.append(groups)
        return captures


@dataclass(frozen=True)
class ActionDefinition:
    """Canonical registration record.

    ``pattern`` is a single pattern or a sequence of patterns (an empty
    sequence makes a catch-all).
    """

    pattern: PatternInput
    run: Handler
    description: str | None = None


def _normalize_patterns(pattern: PatternInput) -> tuple[Pattern, ...]:
    if is_pattern_like(pattern):
        return (as_pattern(pattern),)
    if isinstance(pattern, (list, tuple)):
        return tuple(as_pattern(p) for p in pattern)
    raise InvalidRegistrationError(
        f"Unsupported pattern {pattern!r}: expected a string, a compiled regular "
        "expression, or a list of those"
    )


def default_description(run: Handler) -> str:
    """Describe a handler that was registered without a description.

    Uses the first docstring line, then the whitespace-collapsed source text,
    then the qualified name.  Only functions and methods contribute a
    docstring; other callables would report their class's.
    """
    doc = run.__doc__ if inspect.isfunction(run) or inspect.ismethod(run) else None
    if doc and doc.strip():
        return inspect.cleandoc(doc).splitlines()[0]
    try:
        source = inspect.getsource(run)
    except (OSError, TypeError):
        source = ""
    if source.strip():
        return " ".join(source.split())
    return getattr(run, "__qualname__", None) or repr(run)


def build_action(definition: ActionDefinition) -> Action:
    """Turn a definition into an immutable :class:`Action`."""
    if not callable(definition.run):
        raise InvalidRegistrationError(f"Action handler must be callable, got {definition.run!r}")
    patterns = _normalize_patterns(definition.pattern)
    description = definition.description
    if description is None or description == "":
        description = default_description(definition.run)
    return Action(patterns=patterns, run=definition.run, description=str(description))


def _definition_from_mapping(obj: Mapping[str, Any]) -> ActionDefinition:
    if "pattern" not in obj or "run" not in obj:
        raise InvalidRegistrationError(
            "Action definitions need both 'pattern' and 'run' keys, got "
            f"{sorted(obj)!r}"
        )
    description = obj.get("description")
    return ActionDefinition(
        pattern=obj["pattern"],
        run=obj["run"],
        description=None if description is None else str(description),
    )


def resolve_register_args(args: Sequence[Any]) -> ActionDefinition:
    """Classify the positional arguments of ``register()`` into a definition.

    Leading pattern-like arguments are collected until the first callable,
    which becomes the handler.  Strings after the handler are descriptions
    (the last one wins); any other trailing value is ignored.

    Raises:
        InvalidRegistrationError: no callable was given, or an argument before
            the handler is not a pattern.
    """
    if len(args) == 1 and isinstance(args[0], ActionDefinition):
        return args[0]
    if len(args) == 1 and isinstance(args[0], Mapping):
        return _definition_from_mapping(args[0])

    patterns: list[Any] = []
    run: Handler | None = None
    description: str | None = None
    for arg in args:
        if run is None:
            if callable(arg) and not is_pattern_like(arg):
                run = arg
            elif is_pattern_like(arg):
                patterns.append(arg)
            else:
                raise InvalidRegistrationError(
                    f"Invalid arguments in register(): unexpected {arg!r} before the handler"
                )
        elif isinstance(arg, str):
            description = arg

    if run is None:
        raise InvalidRegistrationError("Invalid arguments in register(): no handler provided")
    return ActionDefinition(pattern=patterns, run=run, description=description)
