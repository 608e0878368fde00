"""bump-workspaces: semantic version bumps for multi-package workspaces, driven by conventional commits."""

from __future__ import annotations

__version__ = "0.1.0"
