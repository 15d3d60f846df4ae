"""Rule storage and path matching for route-access.

Exports the default-policy enum, the rule record and store, and the
path pattern compiler.
"""
from __future__ import annotations

from route_access.rules.matcher import PathMatcher, compile_pattern, pattern_to_regex
from route_access.rules.policy import Policy
from route_access.rules.store import WILDCARD, Rule, RuleStore

__all__ = [
    "PathMatcher",
    "Policy",
    "Rule",
    "RuleStore",
    "WILDCARD",
    "compile_pattern",
    "pattern_to_regex",
]
