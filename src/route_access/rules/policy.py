"""Default access policy.

The policy is the outcome applied when no registered rule matches a
query.  Only two values exist; anything else is rejected by
:meth:`Policy.coerce`.
"""
from __future__ import annotations

from enum import Enum


class Policy(str, Enum):
    """Default grant/deny outcome."""

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def coerce(cls, value: object) -> Policy | None:
        """Return the Policy named by *value* (case-insensitive), or ``None``."""
        if isinstance(value, Policy):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None
