"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bump_workspaces.config.models import BumpWorkspacesConfig
from bump_workspaces.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_NAME = "bump-workspaces"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.bump-workspaces] table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> BumpWorkspacesConfig:
    """Load and validate the workspace configuration.

    Args:
        path: pyproject.toml, or a directory to search from

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    data = extract_config(load_pyproject_toml(pyproject_path))
    try:
        return BumpWorkspacesConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] in {pyproject_path}:\n{e}") from e
