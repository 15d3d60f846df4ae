"""Configuration loading for route-access."""
from __future__ import annotations

from route_access.config.loader import AccessConfig, AccessConfigError, ConfigLoader

__all__ = [
    "AccessConfig",
    "AccessConfigError",
    "ConfigLoader",
]
