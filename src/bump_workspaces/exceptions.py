"""Exception hierarchy for bump-workspaces.

Every error raised by this package derives from :class:`BumpWorkspacesError`,
so callers can catch the whole family with a single ``except`` clause.

Commit-level problems (unparseable subjects, unknown modules, ...) are not
exceptions: they are collected as diagnostics. The only fatal condition in the
core is :class:`VersionResolutionError`.
"""

from __future__ import annotations


class BumpWorkspacesError(Exception):
    """Base class for all bump-workspaces errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(BumpWorkspacesError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """The [tool.bump-workspaces] table is invalid."""


# =============================================================================
# Project / workspace
# =============================================================================


class ProjectError(BumpWorkspacesError):
    """A workspace member manifest could not be read or written."""


class VersionNotFoundError(ProjectError):
    """A manifest has no version field."""


class WorkspaceError(ProjectError):
    """The workspace layout is inconsistent."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(BumpWorkspacesError):
    """Base class for version handling errors."""


class InvalidVersionError(VersionError):
    """A version string is not a valid semantic version."""

    def __init__(self, version: str, reason: str | None = None) -> None:
        self.version = version
        message = f"Invalid semantic version: {version!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class VersionResolutionError(VersionError):
    """The change between two recorded versions of a module cannot be determined.

    Raised when a manually edited version compares equal to the version it
    supposedly replaced, i.e. nothing was actually changed.
    """

    def __init__(self, module: str, from_version: str, to_version: str) -> None:
        self.module = module
        self.from_version = from_version
        self.to_version = to_version
        super().__init__(
            f"Unexpected manual version update for {module}: {from_version} -> {to_version}"
        )
