"""Configuration management for release-bump."""

from __future__ import annotations

from release_bump.config.loader import load_config
from release_bump.config.models import (
    ChangelogConfig,
    ReleaseBumpConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "ReleaseBumpConfig",
    "VersionConfig",
    "load_config",
]
