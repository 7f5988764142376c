# Core orchestration logic for fileenum.
# This file turns resolved command-line options into an enumeration and
# prints the results.
#
# It intentionally contains no CLI parsing and no traversal logic.

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from fileenum.enumerator import iter_entries
from fileenum.models import Backend, FileInfo, ListOptions
from fileenum.pattern import default_case_sensitive
from fileenum.reader import reader_class_for

console = Console()
logger = logging.getLogger(__name__)


# Simple counters used for the summary block.
@dataclass
class Counters:
    files: int = 0
    directories: int = 0
    total_size: int = 0


def run_diagnose() -> None:
    # Report which backend and matching rules apply on this machine.
    console.print("[bold]fileenum diagnose[/bold]")
    console.print(f"platform: {platform.system() or 'unknown'} ({os.name})")
    console.print(f"auto backend: {reader_class_for(Backend.auto).__name__}")
    sensitivity = "case-sensitive" if default_case_sensitive() else "case-insensitive"
    console.print(f"pattern matching: {sensitivity}")


def run_list(opts: ListOptions) -> int:
    # Entry point for listing. Returns the process exit code.
    if not opts.root.is_dir():
        # Enumeration would just be empty; tell the user why.
        console.print(f"[yellow]Not a directory:[/yellow] {opts.root}")
        return 1

    logger.debug(
        "Enumerating %s (recursive=%s, type=%r, pattern=%r, policy=%s)",
        opts.root,
        opts.recursive,
        opts.file_type,
        opts.pattern,
        opts.policy.value,
    )

    counters = Counters()
    table = _new_table() if opts.long else None

    results = iter_entries(
        opts.root,
        opts.recursive,
        opts.file_type,
        pattern=opts.pattern,
        folder_search_policy=opts.policy,
        reader_factory=reader_class_for(opts.backend),
    )

    for path, info in results:
        _count(counters, info)
        if table is not None:
            table.add_row(
                str(path),
                "dir" if info.is_directory else ("link" if info.is_symlink else "file"),
                "" if info.is_directory else str(info.size),
            )
        else:
            console.print(str(path), markup=False, highlight=False, soft_wrap=True)

        if opts.max_results is not None and counters.files + counters.directories >= opts.max_results:
            break

    if table is not None:
        console.print(table)
        _print_summary(counters)

    return 0


def _count(counters: Counters, info: FileInfo) -> None:
    if info.is_directory:
        counters.directories += 1
    else:
        counters.files += 1
        counters.total_size += info.size


def _new_table() -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    return table


def _print_summary(counters: Counters) -> None:
    console.print()
    console.print("[bold]Summary[/bold]")
    console.print(f"Files:       {counters.files}")
    console.print(f"Directories: {counters.directories}")
    console.print(f"Total size:  {counters.total_size}")
