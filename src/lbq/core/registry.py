# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Action registry and longest-match dispatch.

The registry is built once per run by the commands file's ``install``
callback and then consulted by :meth:`Registry.find`.  Among the actions
whose patterns match a prefix of argv, the one with the most patterns wins;
ties go to the action registered first.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, NamedTuple

from .actions import Action, ActionDefinition, build_action, resolve_register_args

# Gap between the longest label and the descriptions in listings.
LIST_GUTTER = 4


class Dispatch(NamedTuple):
    """Outcome of a successful :meth:`Registry.find`."""

    action: Action
    captures: list[list[str | None]]
    rest: list[str]

    @property
    def args(self) -> list[Any]:
        """Positional arguments for the handler: captures, then leftover tokens."""
        return [*self.captures, *self.rest]


class Registry:
    """Ordered collection of actions for one dispatch session."""

    def __init__(self) -> None:
        self.actions: list[Action] = []

    def __len__(self) -> int:
        return len(self.actions)

    def add(self, definition: ActionDefinition) -> Action:
        """Build an action from *definition* and append it."""
        action = build_action(definition)
        self.actions.append(action)
        return action

    def register(self, *args: Any) -> Registry:
        """Register an action from any supported call shape.

        See :mod:`lbq.core.actions` for the accepted shapes.  Duplicate
        patterns are allowed; the first registered action wins ties.
        """
        self.add(resolve_register_args(args))
        return self

    def find(self, argv: Sequence[str]) -> Dispatch | None:
        """Return the first longest matching action for *argv*, or ``None``."""
        best: Action | None = None
        best_captures: list[list[str | None]] = []
        for action in self.actions:
            if best is not None and action.length <= best.length:
                continue
            captures = action.match(argv)
            if captures is None:
                continue
            best = action
            best_captures = captures
        if best is None:
            return None
        return Dispatch(best, best_captures, list(argv[best.length :]))

    def rows(self) -> list[tuple[str, str]]:
        """Return ``(label, description)`` for every action, in registration order."""
        return [(a.label, a.description) for a in self.actions]

    def list(self, format_label: Callable[[str], str] | None = None) -> list[str]:
        """Return one aligned display line per action.

        *format_label* decorates each label (e.g. with colour); alignment is
        computed from the undecorated label.
        """
        rows = self.rows()
        width = max((len(label) for label, _ in rows), default=0) + LIST_GUTTER
        lines = []
        for label, description in rows:
            shown = format_label(label) if format_label is not None else label
            lines.append(shown + " " * (width - len(label)) + (description or ""))
        return lines


# ---------- Invocation ----------


async def _await(value: Awaitable[Any]) -> Any:
    return await value


def _run_to_completion(result: Awaitable[Any], alternative: str) -> Any:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(result))
    if inspect.iscoroutine(result):
        result.close()
    raise RuntimeError(
        "Cannot run an awaitable result while an event loop is running; "
        f"use {alternative}() instead"
    )


def invoke(dispatch: Dispatch) -> Any:
    """Call the dispatched handler and return its result.

    Awaitable results are run to completion, which requires that no event
    loop is running in this thread (use :func:`ainvoke` there).  Exceptions raised
    by the handler propagate to the caller.
    """
    result = dispatch.action.run(*dispatch.args)
    if inspect.isawaitable(result):
        return _run_to_completion(result, "ainvoke")
    return result


async def ainvoke(dispatch: Dispatch) -> Any:
    """Coroutine variant of :func:`invoke` for callers inside an event loop."""
    result = dispatch.action.run(*dispatch.args)
    if inspect.isawaitable(result):
        result = await result
    return result


# ---------- Configuration callback ----------

InstallCallback = Callable[[Callable[..., Any]], Any]


def define_config(callback: InstallCallback) -> Registry:
    """Run *callback* with a fresh registry's ``register`` and return the registry.

    If the callback returns an awaitable it is awaited before returning; inside
    a running event loop use :func:`adefine_config` instead.
    """
    registry = Registry()
    result = callback(registry.register)
    if inspect.isawaitable(result):
        _run_to_completion(result, "adefine_config")
    return registry


async def adefine_config(callback: InstallCallback) -> Registry:
    """Coroutine variant of :func:`define_config`."""
    registry = Registry()
    result = callback(registry.register)
    if inspect.isawaitable(result):
        await result
    return registry
