"""Route-based access control engine.

:class:`Access` combines a default :class:`Policy` with allow/deny rules
attached to route patterns and subjects, and answers whether a subject
may reach a given verb and path.

Precedence
----------
For each queried subject, the rules registered for that subject and the
global rules (subject ``*``) for the query verb are merged; a
subject-specific rule shadows a global rule on the same pattern.  The
merged patterns are tried in descending lexicographic order and the
first one matching the path decides.  When no rule matches for any
subject, the default policy applies.

Example
-------
>>> access = Access(policy="allow")
>>> access.deny("/admin*").allow("/admin*", "admin")  # doctest: +ELLIPSIS
<...Access ...>
>>> access.granted("GET /admin/users")
False
>>> access.granted("GET /admin/users", "admin")
True
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from route_access.host import DenyHandler, Host
from route_access.routes.parser import RouteParser
from route_access.routes.table import RouteTable
from route_access.rules.policy import Policy
from route_access.rules.store import Rule, RuleStore

logger = logging.getLogger(__name__)

Subjects = str | Iterable[str]


def split_subjects(subjects: Subjects | None) -> list[str]:
    """Normalise a subject specifier into a list of trimmed subjects.

    A string is split on commas.  An empty specifier yields ``[""]``,
    the anonymous subject.
    """
    if subjects is None:
        return [""]
    if isinstance(subjects, str):
        parts = subjects.split(",")
    else:
        parts = [str(s) for s in subjects]
    return [part.strip() for part in parts] or [""]


@dataclass(frozen=True)
class Decision:
    """Outcome of an access query.

    Attributes
    ----------
    allowed:
        Whether access is granted.
    verb:
        The verb the query was evaluated for.
    path:
        The queried path.
    subject:
        The subject whose rule decided, or ``None`` when the default
        policy applied.
    rule:
        The controlling rule, or ``None`` when the default policy applied.
        When several subjects were denied, the first denying rule.
    """

    allowed: bool
    verb: str
    path: str
    subject: str | None = None
    rule: Rule | None = None

    @property
    def is_default(self) -> bool:
        """Return True if no rule matched and the default policy decided."""
        return self.rule is None

    def __bool__(self) -> bool:
        return self.allowed


class Access:
    """Access control engine.

    Parameters
    ----------
    policy:
        Initial default policy (``"allow"`` or ``"deny"``, any case).
        Invalid values are ignored and the policy stays ``allow``.
    rules:
        Ordered mapping of ``"ALLOW <route>"`` / ``"DENY <route>"`` keys
        to subject specifiers, applied in order.
    routes:
        Alias table and verb set used to parse route specifiers.
    """

    ALLOW = Policy.ALLOW
    DENY = Policy.DENY

    def __init__(
        self,
        policy: Policy | str | None = None,
        rules: Mapping[str, Subjects] | None = None,
        routes: RouteTable | None = None,
    ) -> None:
        self._policy: Policy = Policy.ALLOW
        self._store = RuleStore()
        self._parser = RouteParser(routes)
        if policy is not None:
            self.policy(policy)
        if rules:
            self.configure(rules)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def rule(self, accept: bool, route: str, subjects: Subjects = "") -> Access:
        """Register *accept* for *route* and every subject in *subjects*.

        Parameters
        ----------
        accept:
            ``True`` to grant, ``False`` to deny.
        route:
            Route specifier, e.g. ``"GET|POST /blog/@id"`` or ``"@home"``.
        subjects:
            A subject, a comma-joined string of subjects, or a list.  An
            empty value means every subject.

        Raises
        ------
        UnknownAliasError
            If *route* references an undefined alias.
        """
        parsed = self._parser.parse(route)
        self._store.add(
            accept=bool(accept),
            subjects=split_subjects(subjects),
            verbs=parsed.verbs,
            pattern=parsed.path,
        )
        return self

    def allow(self, route: str, subjects: Subjects = "") -> Access:
        """Grant *subjects* access to *route*."""
        return self.rule(True, route, subjects)

    def deny(self, route: str, subjects: Subjects = "") -> Access:
        """Deny *subjects* access to *route*."""
        return self.rule(False, route, subjects)

    def policy(self, default: Policy | str | None = None) -> Policy | Access:
        """Get or set the default policy.

        Called without an argument, returns the current :class:`Policy`.
        Otherwise sets it and returns the engine.  A value other than
        ``allow``/``deny`` leaves the policy unchanged.
        """
        if default is None:
            return self._policy
        coerced = Policy.coerce(default)
        if coerced is None:
            logger.warning(
                "Ignoring invalid policy %r; keeping '%s'.",
                default,
                self._policy.value,
            )
        else:
            self._policy = coerced
        return self

    def configure(self, rules: Mapping[str, Subjects]) -> Access:
        """Apply ``"ALLOW <route>"`` / ``"DENY <route>"`` entries in order.

        The prefix is case-insensitive.  Keys with neither prefix are
        skipped.
        """
        for key, subjects in rules.items():
            lowered = key.lower()
            for accept, prefix in ((False, Policy.DENY.value), (True, Policy.ALLOW.value)):
                if lowered.startswith(prefix):
                    self.rule(accept, key[len(prefix):], subjects)
                    break
            else:
                logger.warning("Skipping rule %r: expected an ALLOW or DENY prefix.", key)
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def decide(self, route: str, subject: Subjects = "") -> Decision:
        """Evaluate *route* for *subject* and explain the outcome.

        Only the first verb of *route* is considered.  Subjects are tried
        in order: the first one whose rules grant access wins.  If no
        subject is granted but at least one was explicitly denied, the
        result is a denial; if no rule matched at all, the default policy
        decides.
        """
        parsed = self._parser.parse(route)
        verb, path = parsed.verb, parsed.path
        denied: tuple[str, Rule] | None = None

        for name in split_subjects(subject):
            rule = self._first_match(name, verb, path)
            if rule is None:
                continue
            if rule.accept:
                logger.debug("Access GRANT %s %s subject=%r rule=%s", verb, path, name, rule.describe())
                return Decision(True, verb, path, name, rule)
            if denied is None:
                denied = (name, rule)

        if denied is not None:
            name, rule = denied
            logger.debug("Access DENY %s %s subject=%r rule=%s", verb, path, name, rule.describe())
            return Decision(False, verb, path, name, rule)

        allowed = self._policy is Policy.ALLOW
        logger.debug(
            "Access DEFAULT-%s %s %s subject=%r",
            "GRANT" if allowed else "DENY",
            verb,
            path,
            subject,
        )
        return Decision(allowed, verb, path)

    def granted(self, route: str, subject: Subjects = "") -> bool:
        """Return True if *subject* may access *route*."""
        return self.decide(route, subject).allowed

    def authorize(
        self,
        context: Host,
        subject: Subjects = "",
        on_deny: DenyHandler | str | None = None,
    ) -> bool:
        """Check the host's current request and report denials to it.

        When access is denied, *on_deny* (if given) is called through
        ``context.call`` with ``(route, subject)``.  Unless it returns
        exactly ``False``, the denial is considered handled and ``True``
        is returned.  Otherwise ``context.error`` receives 403 for an
        identified subject or 401 for an anonymous one, and ``False`` is
        returned.
        """
        if not isinstance(subject, str):
            subject = list(subject)
        route = f"{context.verb} {context.path}"
        if self.granted(route, subject):
            return True
        if on_deny is not None and context.call(on_deny, route, subject) is not False:
            return True
        context.error(403 if subject else 401)
        return False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def rules(self) -> list[Rule]:
        """Every registered rule."""
        return list(self._store)

    @property
    def routes(self) -> RouteTable:
        """The route table used to parse specifiers."""
        return self._parser.routes

    def summary(self) -> dict[str, object]:
        """Return a plain dict describing the engine configuration."""
        return {"policy": self._policy.value, **self._store.summary()}

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._store)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} policy={self._policy.value} rules={len(self._store)}>"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _first_match(self, subject: str, verb: str, path: str) -> Rule | None:
        for rule in self._store.candidates(subject, verb):
            if rule.matches(path):
                return rule
        return None
