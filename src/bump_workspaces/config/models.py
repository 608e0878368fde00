"""Pydantic models for the [tool.bump-workspaces] configuration table."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bump_workspaces.core.commits import DEFAULT_IGNORE_PATTERNS, WILDCARD_SCOPE
from bump_workspaces.core.models import SCOPE_REQUIRED_KINDS, ChangeKind


class CommitsConfig(BaseModel):
    """How commit subjects are classified."""

    model_config = ConfigDict(extra="forbid")

    scope_required: list[str] = Field(
        default_factory=lambda: [kind.value for kind in ChangeKind if kind in SCOPE_REQUIRED_KINDS],
        description="Commit kinds that must name at least one module",
    )
    wildcard_scope: str = Field(
        default=WILDCARD_SCOPE,
        description="Scope token that applies a commit to every module",
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="Subjects matching any of these regexes are ignored entirely",
    )

    @field_validator("scope_required")
    @classmethod
    def _known_kinds(cls, value: list[str]) -> list[str]:
        unknown = [token for token in value if ChangeKind.from_token(token) is None]
        if unknown:
            raise ValueError(f"Unknown commit kind(s): {', '.join(unknown)}")
        return value

    @field_validator("ignore_patterns")
    @classmethod
    def _compilable(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex {pattern!r}: {e}") from e
        return value

    @field_validator("wildcard_scope")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("wildcard_scope cannot be empty")
        return value.strip()

    @property
    def scope_required_kinds(self) -> frozenset[ChangeKind]:
        return frozenset(ChangeKind(token) for token in self.scope_required)


class VersionConfig(BaseModel):
    """How resolved versions are written back."""

    model_config = ConfigDict(extra="forbid")

    update_dependency_pins: bool = Field(
        default=True,
        description="Rewrite exact `name==version` pins on bumped members",
    )


class BumpWorkspacesConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    members: list[str] = Field(
        default_factory=list,
        description="Member directories, relative to the workspace root",
    )
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    @field_validator("members")
    @classmethod
    def _unique_members(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for member in value:
            if member in seen:
                raise ValueError(f"Duplicate workspace member: {member}")
            seen.add(member)
        return value
