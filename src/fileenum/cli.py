# Command-line interface definition for fileenum.
# This file is responsible only for argument parsing, validation,
# and dispatch into core application logic.

from __future__ import annotations

from pathlib import Path as FSPath
from typing import Optional

import typer
from rich.console import Console

from fileenum import __version__
from fileenum.core import run_diagnose, run_list
from fileenum.log import configure_logging
from fileenum.models import Backend, FileType, FolderSearchPolicy, ListOptions

app = typer.Typer(
    add_completion=False,
    help="List directory entries breadth-first with type and glob filtering.",
)
console = Console()


def _resolve_file_type(files: bool, dirs: bool, dot_dot: bool, symlinks: bool) -> FileType:
    # Neither --files nor --dirs means both.
    if not files and not dirs:
        files = dirs = True

    if dot_dot and not dirs:
        raise typer.BadParameter("--dot-dot needs directories in the output; drop --files or add --dirs")

    file_type = FileType(0)
    if files:
        file_type |= FileType.FILES
    if dirs:
        file_type |= FileType.DIRECTORIES
    if dot_dot:
        file_type |= FileType.INCLUDE_DOT_DOT
    if symlinks:
        file_type |= FileType.SHOW_SYM_LINKS
    return file_type


@app.command("list", help="List entries under ROOT.")
def list_entries(
    root: FSPath = typer.Argument(
        FSPath("."),
        help="Directory to enumerate. Defaults to current directory.",
    ),

    # Traversal.
    recursive: bool = typer.Option(
        False, "--recursive", "-r",
        help="Recurse into subdirectories (breadth-first).",
        rich_help_panel="Traversal",
    ),
    policy: FolderSearchPolicy = typer.Option(
        FolderSearchPolicy.MATCH_ONLY, "--policy",
        help="match-only: enter only folders matching the pattern. all: enter every folder.",
        rich_help_panel="Traversal",
    ),
    backend: Backend = typer.Option(
        Backend.auto, "--backend",
        help="Directory reader to use.",
        rich_help_panel="Traversal",
    ),

    # Filtering.
    pattern: str = typer.Option(
        "", "--pattern", "-p",
        help="Glob for entry names, e.g. '*.txt' or 'Foo???.doc'.",
        rich_help_panel="Filtering",
    ),
    files: bool = typer.Option(
        False, "--files",
        help="Show files.",
        rich_help_panel="Filtering",
    ),
    dirs: bool = typer.Option(
        False, "--dirs",
        help="Show directories.",
        rich_help_panel="Filtering",
    ),
    dot_dot: bool = typer.Option(
        False, "--dot-dot",
        help="Include the '..' entry of each directory.",
        rich_help_panel="Filtering",
    ),
    symlinks: bool = typer.Option(
        False, "--symlinks",
        help="Show symbolic links (never followed).",
        rich_help_panel="Filtering",
    ),

    # Output.
    long: bool = typer.Option(
        False, "--long", "-l",
        help="Print a table with type and size, followed by a summary.",
        rich_help_panel="Output",
    ),
    max_results: Optional[int] = typer.Option(
        None, "--max", min=1,
        help="Stop after this many results.",
        rich_help_panel="Output",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log skipped directories and other debug detail to stderr.",
        rich_help_panel="Output",
    ),
):
    configure_logging(verbose)

    opts = ListOptions(
        root=root,
        recursive=recursive,
        file_type=_resolve_file_type(files, dirs, dot_dot, symlinks),
        pattern=pattern,
        policy=policy,
        backend=backend,

        long=long,
        verbose=verbose,

        max_results=max_results,
    )

    code = run_list(opts)
    if code:
        raise typer.Exit(code=code)


@app.command(help="Show the directory reader and matching rules in effect.")
def diagnose():
    run_diagnose()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version",
        help="Show version and exit.",
    ),
):
    # Handle version early and exit cleanly.
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
