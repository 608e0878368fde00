"""Tests for aggregation of change proposals."""

from __future__ import annotations

import itertools

from bump_workspaces.core.aggregate import aggregate
from bump_workspaces.core.models import ChangeKind, ChangeProposal, Commit
from bump_workspaces.core.version import BumpType


def proposal(module: str, kind: str, subject: str) -> ChangeProposal:
    return ChangeProposal(module=module, kind=ChangeKind(kind), commit=Commit(subject, "", subject))


class TestAggregate:
    """Tests for aggregate()."""

    def test_empty(self):
        """No proposals, no decisions."""
        assert aggregate([]) == []

    def test_groups_by_module_in_name_order(self):
        """Decisions come out sorted by module name."""
        decisions = aggregate(
            [
                proposal("tools", "feat", "feat(tools): a"),
                proposal("log", "fix", "fix(log): b"),
                proposal("http", "docs", "docs(http): c"),
                proposal("log", "chore", "chore(log): d"),
            ]
        )

        assert [d.module for d in decisions] == ["http", "log", "tools"]
        assert [len(d.commits) for d in decisions] == [1, 2, 1]

    def test_max_severity(self):
        """The highest severity of a module's proposals wins."""
        decisions = aggregate(
            [
                proposal("log", "fix", "fix(log): a"),
                proposal("log", "BREAKING", "BREAKING(log): b"),
                proposal("log", "feat", "feat(log): c"),
                proposal("http", "docs", "docs(http): d"),
                proposal("http", "feat", "feat(http): e"),
            ]
        )

        assert {d.module: d.severity for d in decisions} == {
            "http": BumpType.MINOR,
            "log": BumpType.MAJOR,
        }

    def test_commits_ordered_by_kind_priority(self):
        """Commits list BREAKING first, then feat, then patch kinds in table order."""
        kinds = ["chore", "test", "refactor", "style", "docs", "perf", "fix", "deprecation", "feat", "BREAKING"]
        decisions = aggregate([proposal("log", kind, f"{kind}(log): x") for kind in kinds])

        assert [c.kind.value for c in decisions[0].commits] == [
            "BREAKING",
            "feat",
            "deprecation",
            "fix",
            "perf",
            "docs",
            "style",
            "refactor",
            "test",
            "chore",
        ]

    def test_ties_keep_encounter_order(self):
        """Commits of the same kind stay in the order they were seen."""
        decisions = aggregate(
            [
                proposal("log", "refactor", "refactor(log): tidy imports"),
                proposal("log", "BREAKING", "BREAKING(log): remove string formatter"),
                proposal("log", "refactor", "refactor(log): replace deprecated imports"),
                proposal("log", "BREAKING", "BREAKING(log): single-export handler files"),
            ]
        )

        assert [c.commit.subject for c in decisions[0].commits] == [
            "BREAKING(log): remove string formatter",
            "BREAKING(log): single-export handler files",
            "refactor(log): tidy imports",
            "refactor(log): replace deprecated imports",
        ]

    def test_repeated_commit_listed_once(self):
        """A commit proposing the same change twice contributes once."""
        repeated = proposal("log", "fix", "fix(log, log): x")
        other = proposal("log", "fix", "fix(log): y")

        decisions = aggregate([repeated, other, repeated])

        assert [c.commit.subject for c in decisions[0].commits] == ["fix(log, log): x", "fix(log): y"]

    def test_severity_is_order_independent(self):
        """Any permutation of the input gives the same severities and module order."""
        proposals = [
            proposal("a", "fix", "fix(a): 1"),
            proposal("b", "feat", "feat(b): 2"),
            proposal("a", "BREAKING", "BREAKING(a): 3"),
            proposal("b", "perf", "perf(b): 4"),
        ]
        expected = [(d.module, d.severity) for d in aggregate(proposals)]

        for permutation in itertools.permutations(proposals):
            assert [(d.module, d.severity) for d in aggregate(permutation)] == expected

    def test_deterministic(self):
        """Identical input gives identical output."""
        proposals = [proposal("a", "fix", "fix(a): 1"), proposal("a", "feat", "feat(a): 2")]

        assert aggregate(proposals) == aggregate(list(proposals))
