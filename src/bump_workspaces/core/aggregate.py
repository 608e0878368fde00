"""Aggregation of change proposals into one decision per module."""

from __future__ import annotations

from collections.abc import Iterable

from bump_workspaces.core.models import ChangeProposal, ContributingCommit, ModuleDecision
from bump_workspaces.core.version import BumpType, max_bump


def aggregate(proposals: Iterable[ChangeProposal]) -> list[ModuleDecision]:
    """Merge proposals into one decision per module.

    The severity of a module is the highest severity of its proposals.
    Its contributing commits are listed by kind priority (``BREAKING``
    first, ``chore`` last), keeping encounter order within a kind. A commit
    naming the same module twice is listed once.

    Returns:
        Decisions sorted by module name
    """
    severities: dict[str, BumpType] = {}
    commits: dict[str, list[ContributingCommit]] = {}

    for proposal in proposals:
        module = proposal.module
        if module in severities:
            severities[module] = max_bump(severities[module], proposal.severity)
        else:
            severities[module] = proposal.severity
            commits[module] = []
        contribution = ContributingCommit(proposal.commit, proposal.kind)
        if contribution not in commits[module]:
            commits[module].append(contribution)

    return [
        ModuleDecision(
            module=module,
            severity=severities[module],
            # sorted() is stable, so ties keep encounter order
            commits=tuple(sorted(commits[module], key=lambda c: c.kind.priority)),
        )
        for module in sorted(severities)
    ]
