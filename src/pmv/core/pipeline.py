"""Main rename flow: resolve, move, scan, rewrite, then rename the remote."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from pmv.config import RenameConfig
from pmv.core.errors import DestinationExistsError
from pmv.core.models import Replacement, ScanReport
from pmv.core.renamer import destination_for, rename_directory, validate_new_name
from pmv.core.resolver import resolve_directory
from pmv.core.rewriter import rewrite_files
from pmv.scanning.channel import ScanChannel
from pmv.scanning.collector import ResultCollector
from pmv.scanning.walker import select_walker
from pmv.utils.remote import rename_remote_repo

logger = logging.getLogger(__name__)


def collect_text_files(root: Path, config: RenameConfig, console: Console) -> tuple[list[Path], int]:
    """Walk root and gather every text file, printing progress as it goes.

    Returns:
        Tuple of (accepted paths in arrival order, number of scan errors)
    """
    channel = ScanChannel(config.channel_capacity)
    collector = ResultCollector(channel, console)
    collector.start()

    walker = select_walker(config.threads, hidden=config.hidden, ignore_files=config.respect_ignore_files)
    try:
        with channel.sender() as sender:
            walker.walk(root, sender)
    finally:
        # The channel is closed once our sender and every worker clone are
        # closed, so this always returns
        paths = collector.join()

    logger.debug(f"Collected {len(paths)} text files, {collector.error_count} scan errors")
    return paths, collector.error_count


def find_and_replace_in_dir(
    root: Path,
    replacement: Replacement,
    config: RenameConfig | None = None,
    console: Console | None = None,
) -> ScanReport:
    """Replace the old name with the new one in every text file under root.

    The full file list is known before the first file is rewritten. A
    rewrite failure aborts the remaining files; nothing is rolled back.

    Raises:
        ReadError: If a collected file cannot be read as text
        WriteError: If a file cannot be written back
    """
    config = config or RenameConfig()
    console = console or Console()

    paths, errors = collect_text_files(root, config, console)
    rewritten = rewrite_files(paths, replacement)
    return ScanReport(accepted=paths, errors=errors, rewritten=rewritten)


def run_rename(
    existing: str,
    new_name: str,
    config: RenameConfig | None = None,
    console: Console | None = None,
    cwd: Path | None = None,
) -> ScanReport:
    """Rename a project directory and every mention of its name.

    Args:
        existing: Project path as given by the user, absolute or relative
        new_name: New project name
        config: Run settings
        console: Console for user-facing output
        cwd: Base for relative paths. Defaults to current directory.

    Returns:
        ScanReport for the run (empty when nothing had to change)

    Raises:
        PmvError: On any fatal failure; see pmv.core.errors
    """
    config = config or RenameConfig()
    console = console or Console()

    source = resolve_directory(existing, cwd)
    validate_new_name(new_name)

    if config.dry_run:
        destination = destination_for(source, new_name)
        if destination != source.path and os.path.lexists(destination):
            raise DestinationExistsError(destination)
        console.print(f"Would move from {escape(str(source.path))} to {escape(str(destination))}.", soft_wrap=True)
        return ScanReport()

    destination = rename_directory(source, new_name, console)
    if destination == source.path:
        return ScanReport()

    os.chdir(destination)

    report = find_and_replace_in_dir(destination, Replacement(old=source.name, new=new_name), config, console)
    console.print(f"Rewrote {report.rewritten} of {len(report.accepted)} text files.")

    if config.remote:
        result = rename_remote_repo(new_name, cwd=destination, timeout=config.remote_timeout)
        if not result.success:
            console.print(f"Error renaming GitHub repo: {escape(result.error or 'unknown error')}", soft_wrap=True)

    return report
