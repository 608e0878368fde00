"""Shared fixtures for bump-workspaces tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from bump_workspaces.core.models import Commit, Module

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def modules() -> list[Module]:
    """A small workspace with scoped and unscoped names."""
    return [
        Module("@scope/foo", "1.2.3"),
        Module("@scope/bar", "2.3.4"),
        Module("@scope/baz", "0.2.3"),
        Module("qux", "0.3.4"),
    ]


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits covering every outcome of classification."""
    return [
        Commit("feat(foo): add a feature", "", "c1"),
        Commit("fix(foo,bar): fix a bug", "", "c2"),
        Commit("BREAKING(baz): remove old API", "", "c3"),
        Commit("chore: update CI", "", "c4"),
        Commit("fix: forgot the scope", "", "c5"),
        Commit("random commit", "", "c6"),
        Commit("docs(unknown): update readme", "", "c7"),
        Commit("Release 0.214.0", "", "c8"),
        Commit("0.213.0", "", "c9"),
    ]


def write_member(root: Path, member: str, name: str, version: str, dependencies: list[str] | None = None) -> Path:
    """Create a member directory with a pyproject.toml."""
    directory = root / member
    directory.mkdir(parents=True, exist_ok=True)
    deps = ", ".join(f'"{d}"' for d in dependencies or [])
    manifest = directory / "pyproject.toml"
    manifest.write_text(
        f"""\
[project]
name = "{name}"
# keep this comment
version = "{version}"
dependencies = [{deps}]

[tool.other]
version = "9.9.9"
"""
    )
    return manifest


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace root with three members."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "workspace-root"
version = "0.0.0"
dependencies = ["acme-core==1.2.3", "acme-http>=0.2.3"]

[tool.bump-workspaces]
members = ["packages/core", "packages/http", "packages/cli"]
"""
    )
    write_member(tmp_path, "packages/core", "acme-core", "1.2.3")
    write_member(tmp_path, "packages/http", "acme-http", "0.2.3", ["acme-core==1.2.3"])
    write_member(tmp_path, "packages/cli", "acme-cli", "1.0.0-rc.1", ["acme_core ~= 1.2.3", "acme-http==0.2.3"])
    return tmp_path


@pytest.fixture
def commits_file(tmp_path: Path) -> Path:
    """A commits JSON file next to the workspace."""
    path = tmp_path / "commits.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a" * 40, "subject": "feat(acme-core): add retries", "body": ""},
                {"id": "b" * 40, "subject": "fix(acme-http): handle timeouts", "body": "details"},
                {"id": "c" * 40, "subject": "docs(acme-cli): usage", "body": ""},
                {"id": "d" * 40, "subject": "chore: bump CI image", "body": ""},
                {"id": "e" * 40, "subject": "feat(nope): unknown", "body": ""},
            ]
        )
    )
    return path
