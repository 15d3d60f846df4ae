"""Request-side host interface for :meth:`Access.authorize`.

The engine never reads the current request from global state.  Callers
pass a :class:`Host` explicitly: something exposing the current verb and
path, a way to run a deny handler, and an error channel taking an HTTP
status code.  :class:`RequestContext` is a ready-made implementation for
applications that do not have their own request object to adapt.

Example
-------
::

    ctx = RequestContext(verb="POST", path="/blog/entry")
    if not access.authorize(ctx, "client"):
        print(ctx.error_code)  # 403
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DenyHandler = Callable[[str, Any], Any]


@runtime_checkable
class Host(Protocol):
    """What :meth:`Access.authorize` needs from the routing host."""

    @property
    def verb(self) -> str: ...

    @property
    def path(self) -> str: ...

    def error(self, code: int) -> None: ...

    def call(self, handler: DenyHandler | str, route: str, subject: Any) -> Any: ...


@dataclass
class RequestContext:
    """A single request as seen by the access engine.

    Attributes
    ----------
    verb:
        Request verb, e.g. ``"GET"``.
    path:
        Request path, e.g. ``"/blog/entry"``.
    handlers:
        Deny handlers that can be referenced by name from
        :meth:`Access.authorize`.
    error_code:
        Status code reported through :meth:`error`, or ``None``.
    """

    verb: str
    path: str
    handlers: Mapping[str, DenyHandler] = field(default_factory=dict)
    error_code: int | None = None

    @property
    def route(self) -> str:
        return f"{self.verb} {self.path}"

    def error(self, code: int) -> None:
        """Record an HTTP error status for the current request."""
        logger.info("Access error %d for %s", code, self.route)
        self.error_code = code

    def clear(self) -> None:
        """Forget any previously reported error."""
        self.error_code = None

    def call(self, handler: DenyHandler | str, route: str, subject: Any) -> Any:
        """Invoke a deny handler with ``(route, subject)``.

        Raises
        ------
        KeyError
            If *handler* is a name not present in :attr:`handlers`.
        """
        if isinstance(handler, str):
            try:
                handler = self.handlers[handler]
            except KeyError:
                raise KeyError(f"Unknown deny handler '{handler}'") from None
        return handler(route, subject)
