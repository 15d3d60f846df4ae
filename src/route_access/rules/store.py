"""In-memory rule storage.

RuleStore keeps every registered rule in a nested mapping::

    subject -> verb -> path pattern -> Rule

The wildcard subject ``*`` always has a bucket.  Rules are never removed;
registering the same (subject, verb, pattern) triple again replaces the
previous entry.

Example
-------
::

    store = RuleStore()
    store.add(accept=False, subjects=["*"], verbs=["GET"], pattern="/admin*")
    store.add(accept=True, subjects=["admin"], verbs=["GET"], pattern="/admin*")
    [rule.pattern for rule in store.candidates("admin", "GET")]
    # ['/admin*']
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from route_access.rules.matcher import PathMatcher, compile_pattern

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class Rule:
    """A single (subject, verb, pattern) -> accept entry.

    Attributes
    ----------
    subject:
        Role or user the rule applies to; ``*`` for every subject.
    verb:
        HTTP-style verb, kept exactly as registered.
    pattern:
        The path pattern the rule is attached to.
    accept:
        ``True`` to grant access, ``False`` to deny it.
    matcher:
        Compiled form of ``pattern``.
    """

    subject: str
    verb: str
    pattern: str
    accept: bool
    matcher: PathMatcher = field(repr=False, compare=False)

    @property
    def is_global(self) -> bool:
        """Return True if the rule applies to every subject."""
        return self.subject == WILDCARD

    def matches(self, path: str) -> bool:
        """Return True if the rule's pattern matches *path*."""
        return self.matcher.matches(path)

    def describe(self) -> str:
        """Return a one-line rendering such as ``DENY GET /admin* (*)``."""
        verdict = "ALLOW" if self.accept else "DENY"
        return f"{verdict} {self.verb} {self.pattern} ({self.subject})"


class RuleStore:
    """Holds rules keyed by subject, verb and path pattern."""

    def __init__(self) -> None:
        self._rules: dict[str, dict[str, dict[str, Rule]]] = {WILDCARD: {}}

    def add(
        self,
        accept: bool,
        subjects: Iterable[str],
        verbs: Iterable[str],
        pattern: str,
    ) -> None:
        """Register *accept* for every (subject, verb) pair.

        The pattern is compiled once and shared by all entries of the
        cross-product.  An empty subject is stored under ``*``.
        """
        matcher = compile_pattern(pattern)
        verb_list = list(verbs)
        for subject in subjects:
            subject = subject or WILDCARD
            by_verb = self._rules.setdefault(subject, {})
            for verb in verb_list:
                by_verb.setdefault(verb, {})[pattern] = Rule(
                    subject=subject,
                    verb=verb,
                    pattern=pattern,
                    accept=accept,
                    matcher=matcher,
                )
                logger.debug(
                    "Registered %s %s %s for subject=%s",
                    "ALLOW" if accept else "DENY",
                    verb,
                    pattern,
                    subject,
                )

    def candidates(self, subject: str, verb: str) -> list[Rule]:
        """Return the rules that apply to *subject* for *verb*.

        Subject-specific rules shadow global rules registered on the same
        pattern.  The result is ordered by pattern, descending, which is
        the order in which patterns are tried.
        """
        merged: dict[str, Rule] = dict(self._rules[WILDCARD].get(verb, {}))
        if subject and subject != WILDCARD:
            merged.update(self._rules.get(subject, {}).get(verb, {}))
        return [merged[pattern] for pattern in sorted(merged, reverse=True)]

    def subjects(self) -> list[str]:
        """Return every subject with a bucket, ``*`` included."""
        return list(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        for by_verb in self._rules.values():
            for by_pattern in by_verb.values():
                yield from by_pattern.values()

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def summary(self) -> dict[str, object]:
        """Return a plain dict summarising the stored rules."""
        rules_per_subject: dict[str, int] = {}
        verbs: set[str] = set()
        for rule in self:
            rules_per_subject[rule.subject] = rules_per_subject.get(rule.subject, 0) + 1
            verbs.add(rule.verb)
        return {
            "rule_count": sum(rules_per_subject.values()),
            "subjects": sorted(rules_per_subject),
            "verbs_covered": sorted(verbs),
            "rules_per_subject": rules_per_subject,
        }
