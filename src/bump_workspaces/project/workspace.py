"""Workspace member discovery and version write-back.

A workspace is a root directory whose pyproject.toml lists its members::

    [tool.bump-workspaces]
    members = ["packages/core", "packages/http"]

Each member directory holds its own pyproject.toml with a ``[project]``
name and version.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bump_workspaces.config.loader import load_config
from bump_workspaces.core.models import Module
from bump_workspaces.exceptions import WorkspaceError
from bump_workspaces.project.pyproject import (
    get_pyproject_name,
    get_pyproject_version,
    update_dependency_pins,
    update_pyproject_version,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from bump_workspaces.config.models import BumpWorkspacesConfig
    from bump_workspaces.core.models import VersionResolution

logger = logging.getLogger(__name__)

MANIFEST_NAME = "pyproject.toml"


def _load_members(root: Path, members: Iterable[str], *, missing_ok: bool) -> list[Module]:
    modules: list[Module] = []
    names: set[str] = set()
    for member in members:
        manifest = root / member / MANIFEST_NAME
        if not manifest.is_file():
            if missing_ok:
                logger.debug("Member %s has no manifest under %s", member, root)
                continue
            raise WorkspaceError(f"{root / member} doesn't have a {MANIFEST_NAME}.")
        name = get_pyproject_name(manifest)
        if name in names:
            raise WorkspaceError(f"Duplicate module name {name!r} in {manifest}.")
        names.add(name)
        modules.append(Module(name=name, version=get_pyproject_version(manifest), path=manifest))
    return modules


def load_workspace(root: Path, config: BumpWorkspacesConfig | None = None) -> list[Module]:
    """Load every member of the workspace at ``root``.

    Raises:
        ConfigNotFoundError: If the root has no pyproject.toml
        WorkspaceError: If a member is missing or two members share a name
        VersionNotFoundError: If a member has no name or version
    """
    config = config or load_config(root / MANIFEST_NAME)
    if not config.members:
        raise WorkspaceError(f"{root / MANIFEST_NAME} doesn't list any workspace members.")
    return _load_members(root, config.members, missing_ok=False)


def load_snapshot(root: Path, members: Iterable[str]) -> list[Module]:
    """Load the members found under an earlier checkout of the workspace.

    Members that did not exist at that point are left out, which marks them
    as newly created.
    """
    return _load_members(root, members, missing_ok=True)


@dataclass
class ApplyResult:
    """Files touched while applying resolutions."""

    updated: list[Path] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    def record(self, path: Path) -> None:
        if path not in self.updated:
            self.updated.append(path)


def apply_resolutions(
    root: Path,
    modules: Sequence[Module],
    resolutions: Iterable[VersionResolution],
    *,
    update_pins: bool = True,
    dry_run: bool = False,
) -> ApplyResult:
    """Write resolved versions back to member manifests.

    Manifests already holding the resolved version (new modules and manual
    edits) are left as they are. With ``update_pins``, pins on the previous
    version of a resolved member in the root and member manifests are moved
    to the new version, whether or not its own manifest was rewritten.

    With ``dry_run`` nothing is written, and ``updated`` lists the files
    that would change.
    """
    by_name = {m.name: m for m in modules}
    manifests = [root / MANIFEST_NAME, *(m.path for m in modules if m.path is not None)]
    result = ApplyResult()

    for resolution in resolutions:
        module = by_name.get(resolution.module)
        if module is None or module.path is None:
            raise WorkspaceError(f"No manifest known for module {resolution.module}.")

        if module.version == resolution.to_version:
            result.unchanged.append(module.name)
        else:
            logger.info("%s: %s -> %s", module.name, resolution.from_version, resolution.to_version)
            if dry_run or update_pyproject_version(module.path, resolution.to_version):
                result.record(module.path)

        if update_pins:
            for manifest in manifests:
                if manifest.is_file() and update_dependency_pins(
                    manifest,
                    module.name,
                    resolution.from_version,
                    resolution.to_version,
                    dry_run=dry_run,
                ):
                    result.record(manifest)

    return result
