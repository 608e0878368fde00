"""Implementation of the 'plan' command.

The plan command computes the next version of every workspace member from
a list of commits, and optionally writes the versions back.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bump_workspaces.config import load_config
from bump_workspaces.config.loader import find_pyproject_toml
from bump_workspaces.core.models import Commit, DiagnosticKind
from bump_workspaces.core.pipeline import plan_bumps
from bump_workspaces.exceptions import BumpWorkspacesError, ProjectError
from bump_workspaces.project.workspace import apply_resolutions, load_snapshot, load_workspace

if TYPE_CHECKING:
    from rich.console import Console

    from bump_workspaces.core.pipeline import BumpPlan


class CommitRecord(BaseModel):
    """One entry of the commits file."""

    id: str = ""
    subject: str
    body: str = ""

    def to_commit(self) -> Commit:
        return Commit(subject=self.subject.strip(), body=self.body.strip(), id=self.id)


class CommitsFile(BaseModel):
    commits: list[CommitRecord] = Field(default_factory=list)


_COMMITS_ADAPTER = TypeAdapter(list[CommitRecord] | CommitsFile)

DIAGNOSTIC_NOTES = {
    DiagnosticKind.UNKNOWN_COMMIT: "The following commits are not recognized:",
    DiagnosticKind.UNRESOLVED_MODULE: "The following commits have unknown scopes:",
    DiagnosticKind.MISSING_SCOPE: "Required scopes are missing in the following commits:",
    DiagnosticKind.SKIPPED: "The following commits are ignored:",
}


def read_commits_file(path: Path) -> list[Commit]:
    """Read commits from a JSON file.

    The file holds either a list of ``{"id", "subject", "body"}`` objects
    or an object with such a list under ``"commits"``.

    Raises:
        ProjectError: If the file is missing or malformed
    """
    if not path.is_file():
        raise ProjectError(f"Commits file not found: {path}")
    try:
        data = _COMMITS_ADAPTER.validate_json(path.read_bytes())
    except ValidationError as e:
        raise ProjectError(f"Invalid commits file {path}:\n{e}") from e
    records = data.commits if isinstance(data, CommitsFile) else data
    return [record.to_commit() for record in records]


def run_plan(
    path: str | None,
    commits_path: str,
    start_root: str | None,
    execute: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the plan command.

    Args:
        path: Optional path to the workspace root
        commits_path: JSON file with the commits since the start point
        start_root: Optional checkout of the workspace at the start point
        execute: Whether to actually write the new versions
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        root = find_pyproject_toml(Path(path) if path else Path.cwd()).parent
        config = load_config(root / "pyproject.toml")
        modules = load_workspace(root, config)
        start_modules = load_snapshot(Path(start_root), config.members) if start_root else None
        commits = read_commits_file(Path(commits_path))
    except BumpWorkspacesError as e:
        err_console.print(f"[red]Error loading workspace:[/] {e}")
        raise SystemExit(1) from e

    console.print(f"Found [cyan]{len(commits)}[/] commits for [cyan]{len(modules)}[/] modules.")

    try:
        plan = plan_bumps(commits, modules, start_modules, config.commits)
    except BumpWorkspacesError as e:
        err_console.print(f"[red]Error resolving versions:[/] {e}")
        raise SystemExit(1) from e

    _print_diagnostics(plan, console)

    if not plan.has_updates:
        console.print("[yellow]No version bumps.[/]")
        return

    console.print(_updates_table(plan))

    try:
        result = apply_resolutions(
            root,
            modules,
            plan.resolutions,
            update_pins=config.version.update_dependency_pins,
            dry_run=not execute,
        )
    except BumpWorkspacesError as e:
        err_console.print(f"[red]Error updating manifests:[/] {e}")
        raise SystemExit(1) from e

    if not execute:
        files = "\n".join(f"  • {path}" for path in result.updated) or "  (none)"
        console.print(
            Panel(
                f"[bold]Would update:[/]\n{escape(files)}",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    for updated in result.updated:
        console.print(f"  [green]✓[/] Updated {updated}")
    for name in result.unchanged:
        console.print(f"  [dim]-[/] {name} already at its new version")

    console.print(
        Panel(
            f"[green]Updated {len(plan.resolutions)} module(s).[/]\n\n"
            "Next steps:\n"
            "  1. Review the changes\n"
            "  2. Commit: [cyan]git add . && git commit -m 'chore: update versions'[/]",
            title="[green]Update Complete[/]",
            border_style="green",
        )
    )


def _updates_table(plan: BumpPlan) -> Table:
    table = Table(title="Version updates")
    table.add_column("module", style="cyan")
    table.add_column("from")
    table.add_column("to", style="green")
    table.add_column("type")
    for resolution in plan.resolutions:
        kind = f"{resolution.magnitude} (manual)" if resolution.manual else str(resolution.magnitude)
        table.add_row(resolution.module, resolution.from_version, resolution.to_version, kind)
    return table


def _print_diagnostics(plan: BumpPlan, console: Console) -> None:
    if not plan.diagnostics:
        return
    console.print(f"Found [cyan]{len(plan.diagnostics)}[/] unhandled commits:")
    for kind, note in DIAGNOSTIC_NOTES.items():
        diagnostics = plan.diagnostics_of(kind)
        if not diagnostics:
            continue
        style = "yellow" if kind.is_error else "dim"
        console.print(f"\n[{style}]{note}[/]")
        for d in diagnostics:
            commit_id = f"[dim]{d.commit.id[:7]}[/] " if d.commit.id else ""
            console.print(f"  • {commit_id}{escape(d.commit.subject)} [dim]({escape(d.reason)})[/]")
