"""Conventional commit classification.

A commit subject of the form ``kind(scope, ...): description`` is turned
into one :class:`ChangeProposal` per named module, for example::

    feat(http,log): add request ids      -> feat for http, feat for log
    fix(*): update license header        -> fix for every known module
    BREAKING(semver): remove rsort()     -> BREAKING for semver

Anything else becomes a :class:`Diagnostic` explaining why the commit was
left out. Subjects of the tool's own release commits are ignored silently.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bump_workspaces.core.models import (
    SCOPE_REQUIRED_KINDS,
    ChangeKind,
    ChangeProposal,
    Commit,
    Diagnostic,
    DiagnosticKind,
)

if TYPE_CHECKING:
    from bump_workspaces.config.models import CommitsConfig

logger = logging.getLogger(__name__)

# kind, optional parenthesized scope list, description
SUBJECT_PATTERN = re.compile(r"^([^:()]+)(?:\(([^)]+)\))?: (.*)$")

SCOPE_SEPARATOR = re.compile(r"\s*,\s*")

WILDCARD_SCOPE = "*"

DEFAULT_IGNORE_PATTERNS = [
    # Version bump commits made by this tool
    r"^v?\d+\.\d+\.\d+",
    # Release commits
    r"^Release \d+\.\d+\.\d+",
]


@dataclass(frozen=True)
class ParsedSubject:
    """The pieces of a conventional commit subject."""

    kind: str
    scopes: tuple[str, ...]
    description: str


def parse_subject(subject: str) -> ParsedSubject | None:
    """Split a subject line into kind, scopes and description.

    Returns:
        The parsed subject, or None if it is not a conventional commit subject
    """
    match = SUBJECT_PATTERN.match(subject)
    if match is None:
        return None
    kind, scope_list, description = match.groups()
    scopes: tuple[str, ...] = ()
    if scope_list:
        scopes = tuple(s for s in SCOPE_SEPARATOR.split(scope_list.strip()) if s)
    return ParsedSubject(kind=kind, scopes=scopes, description=description)


def is_release_commit(commit: Commit, patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS) -> bool:
    """Check whether a commit is one of the tool's own version or release commits."""
    return any(re.match(pattern, commit.subject) for pattern in patterns)


def classify(
    commit: Commit,
    known_modules: Sequence[str] = (),
    config: CommitsConfig | None = None,
) -> list[ChangeProposal] | Diagnostic:
    """Classify a commit into module-scoped change proposals.

    Args:
        commit: The commit to classify
        known_modules: Names of all workspace modules, used to expand the wildcard scope
        config: Commit settings; the built-in defaults are used when omitted

    Returns:
        A list of proposals (empty for ignored release commits), or a
        diagnostic when the commit cannot be used
    """
    ignore_patterns = config.ignore_patterns if config else DEFAULT_IGNORE_PATTERNS
    scope_required = config.scope_required_kinds if config else SCOPE_REQUIRED_KINDS
    wildcard = config.wildcard_scope if config else WILDCARD_SCOPE

    if is_release_commit(commit, ignore_patterns):
        logger.debug("Ignoring release commit %s: %s", commit.id, commit.subject)
        return []

    parsed = parse_subject(commit.subject)
    if parsed is None:
        return Diagnostic(
            kind=DiagnosticKind.UNKNOWN_COMMIT,
            commit=commit,
            reason="The commit message does not match the conventional commit pattern.",
        )

    kind = ChangeKind.from_token(parsed.kind)
    if kind is None:
        return Diagnostic(
            kind=DiagnosticKind.UNKNOWN_COMMIT,
            commit=commit,
            reason=f"Unknown commit kind: {parsed.kind}.",
        )

    if not parsed.scopes:
        if kind in scope_required:
            return Diagnostic(
                kind=DiagnosticKind.MISSING_SCOPE,
                commit=commit,
                reason=f"The commit message does not specify a module, which {kind} requires.",
            )
        return Diagnostic(
            kind=DiagnosticKind.SKIPPED,
            commit=commit,
            reason="The commit message does not specify a module.",
        )

    modules: Sequence[str] = parsed.scopes
    if parsed.scopes == (wildcard,):
        modules = known_modules

    logger.debug("Classified %s as %s for %s", commit.id or commit.subject, kind, ", ".join(modules))
    return [ChangeProposal(module=module, kind=kind, commit=commit) for module in modules]
