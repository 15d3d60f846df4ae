"""Unit tests for config/loader.py — AccessConfig and ConfigLoader."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from route_access.access import Access
from route_access.config.loader import AccessConfig, AccessConfigError, ConfigLoader
from route_access.routes.table import HTTP_VERBS, UnknownAliasError
from route_access.rules.policy import Policy


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_VALID_YAML = textwrap.dedent(
    """\
    version: "1"
    policy: deny
    aliases:
      blog_entry: /blog/@id/@slug
    rules:
      "ALLOW GET /blog*": "*"
      "DENY GET @blog_entry": client, guest
      "ALLOW * @blog_entry": [admin, editor]
    """
)


@pytest.fixture()
def loader() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "access.yaml"
    path.write_text(_VALID_YAML, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# AccessConfig
# ---------------------------------------------------------------------------


class TestAccessConfig:
    def test_defaults(self, loader: ConfigLoader) -> None:
        config = loader.defaults()
        assert config.version == "1"
        assert config.policy is None
        assert config.rules == {}
        assert config.route_table().verbs == HTTP_VERBS

    def test_build_returns_access(self) -> None:
        assert isinstance(AccessConfig().build(), Access)

    def test_rule_order_is_preserved(self, loader: ConfigLoader) -> None:
        config = loader.load_string(_VALID_YAML)
        assert list(config.rules) == [
            "ALLOW GET /blog*",
            "DENY GET @blog_entry",
            "ALLOW * @blog_entry",
        ]

    def test_custom_verbs(self, loader: ConfigLoader) -> None:
        config = loader.load_from_dict({"verbs": ["POST", "GET"], "rules": {"DENY /x": ""}})
        access = config.build()
        assert {r.verb for r in access.rules} == {"POST", "GET"}
        assert access.granted("/x") is False

    def test_null_subject_means_everyone(self, loader: ConfigLoader) -> None:
        config = loader.load_string('rules:\n  "DENY GET /x":\n')
        assert [r.subject for r in config.build().rules] == ["*"]


# ---------------------------------------------------------------------------
# ConfigLoader
# ---------------------------------------------------------------------------


class TestConfigLoader:
    def test_load_file(self, loader: ConfigLoader, config_file: Path) -> None:
        access = loader.load(config_file).build()
        assert access.policy() is Policy.DENY
        assert access.granted("GET /blog")
        assert not access.granted("GET /blog/1/hello", "client")
        assert access.granted("GET /blog/1/hello", "editor")
        assert access.granted("DELETE /blog/1/hello", "admin")
        assert not access.granted("DELETE /blog/1/hello", "guest")

    def test_load_accepts_str_path(self, loader: ConfigLoader, config_file: Path) -> None:
        assert loader.load(str(config_file)).policy == "deny"

    def test_missing_file_raises(self, loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert loader.load(path).rules == {}

    def test_bad_yaml_raises(self, loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("rules: [unclosed", encoding="utf-8")
        with pytest.raises(AccessConfigError) as exc_info:
            loader.load(path)
        assert exc_info.value.config_path == str(path)

    def test_bad_yaml_string_raises(self, loader: ConfigLoader) -> None:
        with pytest.raises(AccessConfigError, match="parse"):
            loader.load_string("rules: [unclosed")

    def test_non_mapping_raises(self, loader: ConfigLoader) -> None:
        with pytest.raises(AccessConfigError, match="mapping"):
            loader.load_string("- just\n- a list\n")

    def test_rules_must_be_mapping(self, loader: ConfigLoader) -> None:
        with pytest.raises(AccessConfigError):
            loader.load_from_dict({"rules": ["ALLOW /foo"]})

    def test_unsupported_version_raises(self, loader: ConfigLoader) -> None:
        with pytest.raises(AccessConfigError, match="version"):
            loader.load_from_dict({"version": "99", "rules": {}})

    def test_numeric_version_accepted(self, loader: ConfigLoader) -> None:
        assert loader.load_string("version: 1\n").version == "1"

    def test_config_path_in_message(self, loader: ConfigLoader) -> None:
        with pytest.raises(AccessConfigError, match=r"\[inline\]"):
            loader.load_from_dict({"version": "99"}, config_path="inline")

    def test_access_config_error_is_value_error(self) -> None:
        assert issubclass(AccessConfigError, ValueError)

    def test_invalid_policy_is_ignored_by_engine(self, loader: ConfigLoader) -> None:
        access = loader.load_from_dict({"policy": "maybe"}).build()
        assert access.policy() is Policy.ALLOW

    def test_non_string_policy_is_ignored_by_engine(self, loader: ConfigLoader) -> None:
        config = loader.load_string("policy: 1\nrules:\n  'DENY /x': '*'\n")
        assert config.policy == 1
        access = config.build()
        assert access.policy() is Policy.ALLOW
        assert access.granted("GET /x") is False
        assert access.granted("GET /y") is True

    def test_unknown_alias_surfaces_on_build(self, loader: ConfigLoader) -> None:
        config = loader.load_from_dict({"rules": {"DENY @missing": "*"}})
        with pytest.raises(UnknownAliasError):
            config.build()

    def test_extra_keys_allowed(self, loader: ConfigLoader) -> None:
        config = loader.load_from_dict({"description": "blog acl", "rules": {}})
        assert config.rules == {}
