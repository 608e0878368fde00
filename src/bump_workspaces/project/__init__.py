"""Workspace manifests: reading member versions and writing bumps back."""

from __future__ import annotations

from bump_workspaces.project.workspace import apply_resolutions, load_snapshot, load_workspace

__all__ = [
    "apply_resolutions",
    "load_snapshot",
    "load_workspace",
]
