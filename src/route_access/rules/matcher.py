"""Path pattern compilation.

A path pattern is a ``/``-delimited string that may contain two kinds of
placeholder:

``*``
    Matches any run of characters, ``/`` included.  It may appear
    anywhere in the pattern (``/admin*``, ``/*/edit``).
``@name`` or ``@``
    Matches exactly one path segment.  The name is cosmetic and is not
    captured.

Example
-------
>>> matcher = compile_pattern("/blog/@id/*")
>>> matcher.matches("/blog/42/comments/7")
True
>>> matcher.matches("/blog/comments")
False
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

_TOKEN = re.compile(r"@\w*")
_SEGMENT = "[^/]+"


def pattern_to_regex(pattern: str) -> str:
    """Translate a path pattern into an (unanchored) regular expression."""
    escaped = re.escape(pattern).replace(r"\*", ".*")
    return _TOKEN.sub(lambda _m: _SEGMENT, escaped)


@dataclass(frozen=True)
class PathMatcher:
    """Compiled form of a single path pattern.

    Attributes
    ----------
    pattern:
        The source pattern as registered.
    regex:
        The compiled expression.  It is applied with ``fullmatch`` so the
        pattern is anchored at both ends.
    """

    pattern: str
    regex: re.Pattern[str] = field(repr=False, compare=False)

    def matches(self, path: str) -> bool:
        """Return True if *path* matches the whole pattern."""
        return self.regex.fullmatch(path) is not None


def compile_pattern(pattern: str) -> PathMatcher:
    """Compile *pattern* into a :class:`PathMatcher`."""
    return PathMatcher(pattern=pattern, regex=re.compile(pattern_to_regex(pattern)))
