"""route-access — route-based access control for HTTP-style verbs and paths.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import route_access as ra
>>> access = ra.Access(policy="deny")
>>> _ = access.allow("GET /blog*").allow("* /admin*", "admin")
>>> access.granted("GET /blog/hello")
True
>>> access.granted("POST /admin/users", ["editor", "admin"])
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

from route_access.access import Access, Decision, split_subjects

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
from route_access.rules.matcher import PathMatcher, compile_pattern
from route_access.rules.policy import Policy
from route_access.rules.store import WILDCARD, Rule, RuleStore

# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
from route_access.routes.parser import ParsedRoute, RouteParser
from route_access.routes.table import HTTP_VERBS, RouteTable, UnknownAliasError

# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------
from route_access.host import Host, RequestContext

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from route_access.config.loader import AccessConfig, AccessConfigError, ConfigLoader

__all__ = [
    "__version__",
    "Access",
    "Decision",
    "split_subjects",
    # Rules
    "PathMatcher",
    "Policy",
    "Rule",
    "RuleStore",
    "WILDCARD",
    "compile_pattern",
    # Routes
    "HTTP_VERBS",
    "ParsedRoute",
    "RouteParser",
    "RouteTable",
    "UnknownAliasError",
    # Host
    "Host",
    "RequestContext",
    # Configuration
    "AccessConfig",
    "AccessConfigError",
    "ConfigLoader",
]
