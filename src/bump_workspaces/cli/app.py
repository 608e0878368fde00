"""Command-line entry point for bump-workspaces."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from bump_workspaces import __version__
from bump_workspaces.cli.commands.plan import run_plan

app = typer.Typer(
    name="bump-workspaces",
    help="Bump the versions of workspace members from conventional commits.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Route log records through rich on the error console."""
    handler = RichHandler(
        console=err_console,
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bump-workspaces {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Bump the versions of workspace members from conventional commits."""


@app.command()
def plan(
    path: str = typer.Argument(None, help="Workspace root (defaults to the current directory)"),
    commits: str = typer.Option(..., "--commits", "-c", help="JSON file with the commits to classify"),
    start_root: str = typer.Option(
        None,
        "--start-root",
        help="Checkout of the workspace at the start point, used to detect manual version edits",
    ),
    execute: bool = typer.Option(False, "--execute", help="Write the new versions to disk"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Compute the next version of every workspace member."""
    setup_logging(verbose)
    run_plan(path, commits, start_root, execute, console, err_console)


def main() -> None:
    app()
