"""Core business logic for bump-workspaces.

This package contains the pure, I/O-free building blocks:
- Semantic version parsing, diffing and incrementing
- Conventional commit classification
- Module lookup for commit scopes
- Aggregation of proposals into per-module decisions
- Reconciliation of decisions with manually edited versions
"""

from __future__ import annotations

from bump_workspaces.core.aggregate import aggregate
from bump_workspaces.core.commits import classify, is_release_commit, parse_subject
from bump_workspaces.core.models import (
    ChangeKind,
    ChangeProposal,
    Commit,
    ContributingCommit,
    Diagnostic,
    DiagnosticKind,
    Module,
    ModuleDecision,
    VersionResolution,
)
from bump_workspaces.core.modules import resolve_module, unresolved_module
from bump_workspaces.core.pipeline import BumpPlan, plan_bumps
from bump_workspaces.core.reconcile import reconcile
from bump_workspaces.core.version import (
    BumpType,
    increment_version,
    max_bump,
    parse_version,
    version_diff,
)

__all__ = [
    # Version
    "BumpType",
    # Models
    "BumpPlan",
    "ChangeKind",
    "ChangeProposal",
    "Commit",
    "ContributingCommit",
    "Diagnostic",
    "DiagnosticKind",
    "Module",
    "ModuleDecision",
    "VersionResolution",
    # Pipeline
    "aggregate",
    "classify",
    "increment_version",
    "is_release_commit",
    "max_bump",
    "parse_subject",
    "parse_version",
    "plan_bumps",
    "reconcile",
    "resolve_module",
    "unresolved_module",
    "version_diff",
]
