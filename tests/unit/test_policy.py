"""Unit tests for rules/policy.py — Policy enum."""
from __future__ import annotations

import pytest

from route_access.rules.policy import Policy


class TestPolicy:
    def test_allow_value(self) -> None:
        assert Policy.ALLOW == "allow"

    def test_deny_value(self) -> None:
        assert Policy.DENY == "deny"

    @pytest.mark.parametrize("raw", ["allow", "ALLOW", "Allow"])
    def test_coerce_is_case_insensitive(self, raw: str) -> None:
        assert Policy.coerce(raw) is Policy.ALLOW

    def test_coerce_passes_policy_through(self) -> None:
        assert Policy.coerce(Policy.DENY) is Policy.DENY

    @pytest.mark.parametrize("raw", ["grant", "", " allow ", "deny\n", None, 1, True])
    def test_coerce_rejects_unknown_values(self, raw: object) -> None:
        assert Policy.coerce(raw) is None
