"""Host-side route table: named aliases and the recognised verb set."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

HTTP_VERBS: tuple[str, ...] = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "CONNECT",
    "OPTIONS",
)


class UnknownAliasError(KeyError):
    """Raised when a route specifier references an alias that was never defined.

    Attributes
    ----------
    alias:
        The alias name that could not be resolved (without the ``@``).
    """

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(alias)

    def __str__(self) -> str:
        return f"Unknown route alias '@{self.alias}'"


@dataclass
class RouteTable:
    """Alias table and verb set supplied by the routing host.

    Parameters
    ----------
    aliases:
        Maps alias names to concrete path patterns, e.g.
        ``{"blog_entry": "/blog/@id/@slug"}``.
    verbs:
        Verbs implied by a route specifier that names none (or ``*``).
        Order matters: the first verb is the one a verb-less query is
        evaluated for.
    """

    aliases: dict[str, str] = field(default_factory=dict)
    verbs: tuple[str, ...] = HTTP_VERBS

    @classmethod
    def build(
        cls,
        aliases: Mapping[str, str] | None = None,
        verbs: Iterable[str] | None = None,
    ) -> RouteTable:
        """Build a table, falling back to the default verb set."""
        return cls(
            aliases=dict(aliases or {}),
            verbs=tuple(verbs) if verbs else HTTP_VERBS,
        )

    def alias(self, name: str, path: str) -> RouteTable:
        """Register *path* under *name* and return the table."""
        self.aliases[name] = path
        return self

    def resolve(self, name: str) -> str:
        """Return the path registered for alias *name*.

        Raises
        ------
        UnknownAliasError
            If no alias of that name exists.
        """
        try:
            return self.aliases[name]
        except KeyError:
            raise UnknownAliasError(name) from None
