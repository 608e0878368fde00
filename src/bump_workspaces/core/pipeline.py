"""End-to-end bump planning.

Commits flow one way through the pipeline::

    classify -> resolve module -> aggregate -> reconcile

Diagnostics are collected along the way and never stop other modules from
being processed.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bump_workspaces.core.aggregate import aggregate
from bump_workspaces.core.commits import classify
from bump_workspaces.core.models import (
    ChangeProposal,
    Commit,
    Diagnostic,
    DiagnosticKind,
    Module,
    ModuleDecision,
    VersionResolution,
)
from bump_workspaces.core.modules import resolve_module, unresolved_module
from bump_workspaces.core.reconcile import reconcile

if TYPE_CHECKING:
    from bump_workspaces.config.models import CommitsConfig

logger = logging.getLogger(__name__)


@dataclass
class BumpPlan:
    """Result of planning a workspace bump."""

    decisions: list[ModuleDecision] = field(default_factory=list)
    resolutions: list[VersionResolution] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_updates(self) -> bool:
        return bool(self.resolutions)

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]


def collect_proposals(
    commits: Iterable[Commit],
    modules: Sequence[Module],
    config: CommitsConfig | None = None,
) -> tuple[list[ChangeProposal], list[Diagnostic]]:
    """Classify commits and keep the proposals that name a known module.

    Accepted proposals are re-keyed to the canonical module name, so
    ``fix(foo)`` and ``fix(@scope/foo)`` land on the same module.
    """
    names = [m.name for m in modules]
    proposals: list[ChangeProposal] = []
    diagnostics: list[Diagnostic] = []

    for commit in commits:
        result = classify(commit, names, config)
        if isinstance(result, Diagnostic):
            diagnostics.append(result)
            continue
        for proposal in result:
            module = resolve_module(proposal.module, modules)
            if module is None:
                diagnostic = unresolved_module(proposal)
                logger.warning("%s (%s)", diagnostic.reason, commit.subject)
                diagnostics.append(diagnostic)
                continue
            proposals.append(dataclasses.replace(proposal, module=module.name))

    return proposals, diagnostics


def plan_bumps(
    commits: Iterable[Commit],
    modules: Sequence[Module],
    start_modules: Sequence[Module] | None = None,
    config: CommitsConfig | None = None,
) -> BumpPlan:
    """Plan the version bumps for a workspace.

    Args:
        commits: Commits since the start point, in log order
        modules: Workspace modules as currently recorded
        start_modules: Modules as recorded at the start point. When omitted,
            versions are assumed unchanged since then.
        config: Commit classification settings

    Returns:
        The per-module decisions, resolved versions and diagnostics

    Raises:
        VersionResolutionError: If a manual version change cannot be interpreted
    """
    proposals, diagnostics = collect_proposals(commits, modules, config)
    decisions = aggregate(proposals)

    current = {m.name: m.version for m in modules}
    if start_modules is None:
        prior: dict[str, str] = dict(current)
    else:
        prior = {m.name: m.version for m in start_modules}

    resolutions = [
        reconcile(decision, current[decision.module], prior.get(decision.module))
        for decision in decisions
    ]

    logger.info(
        "Planned %d update(s) from %d proposal(s), %d diagnostic(s)",
        len(resolutions),
        len(proposals),
        len(diagnostics),
    )
    return BumpPlan(decisions=decisions, resolutions=resolutions, diagnostics=diagnostics)
