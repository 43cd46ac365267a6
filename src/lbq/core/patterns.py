# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Token matchers used by actions.

A pattern is either a :class:`Literal` (case-insensitive equality) or a
:class:`Regex` (``re.search`` against the token).  Both return the captured
groups for a token, or ``None`` when the token does not match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidRegistrationError

# Flag letters shown in listings, in the order they are rendered.
_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


@dataclass(frozen=True)
class Literal:
    """Matches a single token equal to *text*, ignoring case."""

    text: str

    def match(self, token: str | None) -> list[str | None] | None:
        if token is None:
            return None
        if token.lower() != self.text.lower():
            return None
        return [token]

    @property
    def label(self) -> str:
        return repr(self.text)


@dataclass(frozen=True)
class Regex:
    """Matches a token searched by *expr*.

    The captured groups are the whole match followed by every submatch;
    optional groups that did not participate are ``None``.
    """

    expr: re.Pattern[str]

    def match(self, token: str | None) -> list[str | None] | None:
        if token is None:
            return None
        m = self.expr.search(token)
        if m is None:
            return None
        return [m.group(0), *m.groups()]

    @property
    def label(self) -> str:
        flags = "".join(letter for flag, letter in _FLAG_LETTERS if self.expr.flags & flag)
        return f"/{self.expr.pattern}/{flags}"


Pattern = Literal | Regex


def is_pattern_like(value: object) -> bool:
    """Return True if *value* can be turned into a pattern by :func:`as_pattern`."""
    return isinstance(value, (str, re.Pattern, Literal, Regex))


def as_pattern(value: object) -> Pattern:
    """Coerce a user-supplied pattern (``str`` or compiled regex) to a :data:`Pattern`."""
    if isinstance(value, (Literal, Regex)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, re.Pattern):
        if not isinstance(value.pattern, str):
            raise InvalidRegistrationError(
                f"Regular expression patterns must be str-based, got {value!r}"
            )
        return Regex(value)
    raise InvalidRegistrationError(
        f"Unsupported pattern {value!r}: expected a string or a compiled regular expression"
    )


def match_pattern(pattern: Pattern, token: str | None) -> list[str | None] | None:
    """Match one token, returning its captured groups or ``None``."""
    return pattern.match(token)
