"""Route specifier parser.

A route specifier combines an optional verb filter with a path pattern
or alias reference.  Accepted forms::

    GET /foo
    GET|PUT /foo
    /foo
    * /foo
    POST @blog_entry

A missing verb filter, or ``*``, stands for every verb in the route
table.  A path starting with ``@`` is replaced by the aliased path.

Example
-------
>>> parser = RouteParser(RouteTable.build({"home": "/"}))
>>> parser.parse("GET|HEAD @home")
ParsedRoute(verbs=('GET', 'HEAD'), path='/')
>>> parser.parse("/about").verbs[0]
'GET'
"""
from __future__ import annotations

import re
from typing import NamedTuple

from route_access.routes.table import RouteTable

_ROUTE = re.compile(r"^[ \t]*(\*|[|\w]*)[ \t]*(\S+)")


class ParsedRoute(NamedTuple):
    """Verbs and path pattern extracted from a route specifier."""

    verbs: tuple[str, ...]
    path: str

    @property
    def verb(self) -> str:
        """The first verb, i.e. the one a query is evaluated for."""
        return self.verbs[0] if self.verbs else ""


class RouteParser:
    """Splits route specifiers into verbs and a path pattern.

    Parameters
    ----------
    routes:
        Alias table and verb set used for ``@alias`` paths and verb-less
        specifiers.  Defaults to an empty alias table with the standard
        HTTP verbs.
    """

    def __init__(self, routes: RouteTable | None = None) -> None:
        self.routes = routes if routes is not None else RouteTable()

    def parse(self, route: str) -> ParsedRoute:
        """Parse *route* into a :class:`ParsedRoute`.

        Verb tokens are returned as written; they are not upper-cased.

        Raises
        ------
        UnknownAliasError
            If the path references an undefined alias.
        """
        verbs = path = ""
        match = _ROUTE.match(route)
        if match:
            verbs, path = match.groups()
            if path.startswith("@"):
                path = self.routes.resolve(path[1:])
        if not verbs or verbs == "*":
            return ParsedRoute(tuple(self.routes.verbs), path)
        return ParsedRoute(tuple(verbs.split("|")), path)
