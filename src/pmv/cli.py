"""CLI interface for pmv."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from pmv import __version__
from pmv.config import RenameConfig
from pmv.core.errors import PmvError
from pmv.core.pipeline import run_rename

app = typer.Typer(
    name="pmv",
    help="Rename a project, and its GitHub repository if one exists.",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    """Send log records through Rich, DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pmv {__version__}")
        raise typer.Exit(0)


@app.command(no_args_is_help=True)
def main(
    project_path: Annotated[
        str,
        typer.Argument(
            metavar="PROJECT_PATH",
            help="Path to the existing project directory (absolute or relative)",
            show_default=False,
        ),
    ],
    new_name: Annotated[
        str,
        typer.Argument(metavar="NEW_NAME", help="New project name", show_default=False),
    ],
    threads: Annotated[
        int | None,
        typer.Option(
            "--threads",
            "-j",
            min=1,
            help="Walker threads (default: number of CPUs; 1 forces a serial walk)",
        ),
    ] = None,
    no_remote: Annotated[
        bool,
        typer.Option("--no-remote", help="Don't rename the GitHub repository"),
    ] = False,
    no_ignore: Annotated[
        bool,
        typer.Option("--no-ignore", help="Don't honor .gitignore/.ignore files"),
    ] = False,
    include_hidden: Annotated[
        bool,
        typer.Option("--hidden", help="Also scan hidden files and directories"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Resolve and validate only, change nothing"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Move PROJECT_PATH to a sibling directory called NEW_NAME.

    Every occurrence of the old directory name inside text files beneath
    the project is replaced with NEW_NAME, then `gh repo rename` is tried.

    Examples:
        pmv ./old-project new-project
        pmv ~/code/foo bar --no-remote
    """
    _configure_logging(verbose)

    config = RenameConfig(
        threads=threads,
        hidden=not include_hidden,
        respect_ignore_files=not no_ignore,
        remote=not no_remote,
        dry_run=dry_run,
    )

    try:
        run_rename(project_path, new_name, config=config, console=console)
    except PmvError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
