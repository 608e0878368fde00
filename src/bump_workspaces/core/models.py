"""Data model shared by the bump pipeline.

All records are frozen dataclasses: they are built from external input once
per run and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, NamedTuple

from bump_workspaces.core.version import BumpType

if TYPE_CHECKING:
    from pathlib import Path


class ChangeKind(StrEnum):
    """Recognised commit kinds.

    Declaration order is the kind priority used when listing the commits
    that contributed to a module's bump: breaking changes first, chores last.
    """

    BREAKING = "BREAKING"
    FEAT = "feat"
    DEPRECATION = "deprecation"
    FIX = "fix"
    PERF = "perf"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"

    @property
    def severity(self) -> BumpType:
        return KIND_SEVERITY[self]

    @property
    def priority(self) -> int:
        return KIND_PRIORITY.index(self)

    @classmethod
    def from_token(cls, token: str) -> ChangeKind | None:
        """Look up a kind by its exact token, or return None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


KIND_SEVERITY: dict[ChangeKind, BumpType] = {
    ChangeKind.BREAKING: BumpType.MAJOR,
    ChangeKind.FEAT: BumpType.MINOR,
    ChangeKind.DEPRECATION: BumpType.PATCH,
    ChangeKind.FIX: BumpType.PATCH,
    ChangeKind.PERF: BumpType.PATCH,
    ChangeKind.DOCS: BumpType.PATCH,
    ChangeKind.STYLE: BumpType.PATCH,
    ChangeKind.REFACTOR: BumpType.PATCH,
    ChangeKind.TEST: BumpType.PATCH,
    ChangeKind.CHORE: BumpType.PATCH,
}

KIND_PRIORITY: list[ChangeKind] = list(ChangeKind)

# Kinds that must name the module(s) they touch.
SCOPE_REQUIRED_KINDS: frozenset[ChangeKind] = frozenset(
    {
        ChangeKind.BREAKING,
        ChangeKind.FEAT,
        ChangeKind.FIX,
        ChangeKind.PERF,
        ChangeKind.DEPRECATION,
    }
)


@dataclass(frozen=True)
class Commit:
    """A commit as handed over by the caller.

    Attributes:
        subject: First line of the commit message
        body: Remaining lines of the message
        id: Stable identifier, usually the commit hash
    """

    subject: str
    body: str = ""
    id: str = ""


@dataclass(frozen=True)
class Module:
    """An independently versioned workspace member.

    ``path`` locates the member's manifest. It is owned by the caller and is
    never serialized back into the manifest itself.
    """

    name: str
    version: str
    path: Path | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ChangeProposal:
    """One requested change for one module, derived from one commit."""

    module: str
    kind: ChangeKind
    commit: Commit

    @property
    def severity(self) -> BumpType:
        return self.kind.severity


class DiagnosticKind(StrEnum):
    """Why a commit (or part of it) did not take part in the bump."""

    UNKNOWN_COMMIT = "unknown_commit"
    MISSING_SCOPE = "missing_scope"
    SKIPPED = "skipped"
    UNRESOLVED_MODULE = "unresolved_module"

    @property
    def is_error(self) -> bool:
        return self is not DiagnosticKind.SKIPPED


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    commit: Commit
    reason: str


class ContributingCommit(NamedTuple):
    commit: Commit
    kind: ChangeKind


@dataclass(frozen=True)
class ModuleDecision:
    """Aggregated outcome for one module.

    Attributes:
        module: Canonical module name
        severity: Highest severity requested by any commit
        commits: Contributing commits, ordered by kind priority then encounter order
    """

    module: str
    severity: BumpType
    commits: tuple[ContributingCommit, ...] = ()


@dataclass(frozen=True)
class VersionResolution:
    """Final version change for one module."""

    module: str
    from_version: str
    to_version: str
    magnitude: BumpType
    manual: bool = False
    decision: ModuleDecision | None = field(default=None, compare=False)
