"""Module lookup for commit scopes."""

from __future__ import annotations

from collections.abc import Iterable

from bump_workspaces.core.models import ChangeProposal, Diagnostic, DiagnosticKind, Module


def resolve_module(ref: str, modules: Iterable[Module]) -> Module | None:
    """Find the module a commit scope refers to.

    A scope matches a module by its full name, or by the trailing part of a
    namespaced name: ``foo`` matches ``@scope/foo``. The first match in
    ``modules`` order wins.
    """
    suffix = f"/{ref}"
    for module in modules:
        if module.name == ref or module.name.endswith(suffix):
            return module
    return None


def unresolved_module(proposal: ChangeProposal) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.UNRESOLVED_MODULE,
        commit=proposal.commit,
        reason=f"Unknown module: {proposal.module}.",
    )

