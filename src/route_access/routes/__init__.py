"""Route specifier parsing and the host route table."""
from __future__ import annotations

from route_access.routes.parser import ParsedRoute, RouteParser
from route_access.routes.table import HTTP_VERBS, RouteTable, UnknownAliasError

__all__ = [
    "HTTP_VERBS",
    "ParsedRoute",
    "RouteParser",
    "RouteTable",
    "UnknownAliasError",
]
