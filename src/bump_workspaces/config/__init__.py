"""Configuration management for bump-workspaces."""

from __future__ import annotations

from bump_workspaces.config.loader import load_config
from bump_workspaces.config.models import (
    BumpWorkspacesConfig,
    CommitsConfig,
    VersionConfig,
)

__all__ = [
    "BumpWorkspacesConfig",
    "CommitsConfig",
    "VersionConfig",
    "load_config",
]
