"""YAML configuration loader for the access engine.

Loads an access configuration file, validates it with pydantic, and
builds a ready-to-use :class:`~route_access.access.Access` instance.

Schema
------
::

    version: "1"
    policy: deny
    aliases:
      blog_entry: /blog/@id/@slug
    verbs: [GET, HEAD, POST]      # optional, defaults to all HTTP verbs
    rules:
      "ALLOW /blog*": "*"
      "DENY POST|PUT /blog/entry": [client, guest]
      "ALLOW @blog_entry": admin,editor

Rules are applied in file order.  The ``ALLOW``/``DENY`` prefix is
case-insensitive.

Example
-------
::

    loader = ConfigLoader()
    access = loader.load("access.yaml").build()
    access.granted("GET /blog/1/hello", "client")
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from route_access.access import Access
from route_access.routes.table import RouteTable

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


class AccessConfigError(ValueError):
    """Raised when an access configuration is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class AccessConfig(BaseModel):
    """Validated access configuration.

    ``policy`` is passed through to the engine unchanged, so an unknown
    value is ignored there rather than rejected here.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    policy: Any = Field(default=None)
    aliases: dict[str, str] = Field(default_factory=dict)
    verbs: list[str] = Field(default_factory=list)
    rules: dict[str, str | list[str] | None] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in _SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version {version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}."
            )
        return version

    def route_table(self) -> RouteTable:
        """Return the route table described by ``aliases`` and ``verbs``."""
        return RouteTable.build(self.aliases, self.verbs)

    def build(self) -> Access:
        """Build an :class:`Access` engine from this configuration."""
        rules = {key: subjects or "" for key, subjects in self.rules.items()}
        return Access(policy=self.policy, rules=rules, routes=self.route_table())


class ConfigLoader:
    """Loads :class:`AccessConfig` objects from YAML files, strings or dicts."""

    def load(self, config_path: str | Path) -> AccessConfig:
        """Load and validate an access YAML file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        AccessConfigError
            If the file cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Access config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise AccessConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._validate(raw, str(config_path))

    def load_string(self, yaml_content: str, config_path: str | None = None) -> AccessConfig:
        """Load and validate a YAML string."""
        try:
            raw = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise AccessConfigError(f"Failed to parse YAML string: {exc}", config_path) from exc
        return self._validate(raw, config_path)

    def load_from_dict(self, config: dict[str, object], config_path: str | None = None) -> AccessConfig:
        """Validate an already-parsed configuration dictionary."""
        return self._validate(config, config_path)

    def defaults(self) -> AccessConfig:
        """Return a configuration with every default applied."""
        return AccessConfig()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate(self, raw: object, config_path: str | None) -> AccessConfig:
        if not isinstance(raw, dict):
            raise AccessConfigError("Access config must be a YAML mapping (dict).", config_path)
        try:
            config = AccessConfig.model_validate(raw)
        except ValidationError as exc:
            raise AccessConfigError(str(exc), config_path) from exc

        logger.info(
            "Loaded %d access rules from %s (policy=%s)",
            len(config.rules),
            config_path or "<dict>",
            config.policy or "default",
        )
        return config
