"""pyproject.toml version manipulation.

This module reads the name and version of a workspace member from its
pyproject.toml and writes bumped versions back.

It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bump_workspaces.config.loader import load_pyproject_toml
from bump_workspaces.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

# The whole [project] table, up to the next table header or EOF
PROJECT_TABLE_PATTERN = r"^\[project\].*?(?=^\[|\Z)"

VERSION_LINE_PATTERN = r'^(version\s*=\s*)["\'][^"\']+["\']'


def get_project_field(pyproject_path: Path, field: str) -> str:
    """Read a string field from the [project] table.

    Raises:
        ConfigNotFoundError: If the file does not exist
        VersionNotFoundError: If the field is missing
    """
    data = load_pyproject_toml(pyproject_path)
    value = data.get("project", {}).get(field)
    if not isinstance(value, str) or not value:
        raise VersionNotFoundError(f"Could not find [project].{field} in {pyproject_path}.")
    return value


def get_pyproject_name(pyproject_path: Path) -> str:
    return get_project_field(pyproject_path, "name")


def get_pyproject_version(pyproject_path: Path) -> str:
    """Get the [project].version from a pyproject.toml."""
    return get_project_field(pyproject_path, "version")


def update_pyproject_version(pyproject_path: Path, new_version: str) -> bool:
    """Update the [project].version in a pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml
        new_version: New version string to set

    Returns:
        True if the file was changed, False if it already had ``new_version``

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If the version line cannot be found
    """
    if not pyproject_path.is_file():
        raise ProjectError(f"Manifest not found: {pyproject_path}")

    content = pyproject_path.read_text()
    found = False

    def replace_version(match: re.Match[str]) -> str:
        nonlocal found
        section = match.group(0)
        found = re.search(VERSION_LINE_PATTERN, section, flags=re.MULTILINE) is not None
        return re.sub(
            VERSION_LINE_PATTERN,
            rf'\g<1>"{new_version}"',
            section,
            count=1,
            flags=re.MULTILINE,
        )

    new_content = re.sub(
        PROJECT_TABLE_PATTERN,
        replace_version,
        content,
        count=1,
        flags=re.MULTILINE | re.DOTALL,
    )

    if not found:
        raise VersionNotFoundError(
            f"Could not find version to update in {pyproject_path}. Expected [project].version."
        )
    if new_content == content:
        return False

    pyproject_path.write_text(new_content)
    return True


def _name_pattern(name: str) -> str:
    # Distribution names compare case-insensitively with -, _ and . interchangeable
    parts = re.split(r"[-_.]+", name)
    return r"[-_.]+".join(re.escape(part) for part in parts)


def rewrite_dependency_pins(content: str, name: str, old_version: str, new_version: str) -> str:
    """Point requirement specifiers on ``name`` at ``new_version``.

    Only specifiers that pin exactly ``old_version`` are touched, e.g.
    ``"foo==1.2.3"``, ``"foo[extra]>=1.2.3"`` or ``'foo ~= 1.2.3; python_version > "3.11"'``.
    """
    pattern = re.compile(
        rf"""(?P<head>["']{_name_pattern(name)}\s*(?:\[[^\]]*\])?\s*(?:==|~=|>=)\s*)"""
        rf"""{re.escape(old_version)}(?=\s*[,;"'])""",
        re.IGNORECASE,
    )
    return pattern.sub(lambda m: f"{m.group('head')}{new_version}", content)


def update_dependency_pins(
    pyproject_path: Path,
    name: str,
    old_version: str,
    new_version: str,
    *,
    dry_run: bool = False,
) -> bool:
    """Rewrite pins on ``name`` inside a pyproject.toml.

    Returns:
        True if the file was changed, or would be with ``dry_run``
    """
    content = pyproject_path.read_text()
    new_content = rewrite_dependency_pins(content, name, old_version, new_version)
    if new_content == content:
        return False
    if dry_run:
        return True
    pyproject_path.write_text(new_content)
    return True
