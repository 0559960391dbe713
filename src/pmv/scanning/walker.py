"""Tree walkers that feed text files into a scan channel.

Two strategies share the same per-directory logic: a serial depth-first
walker and a parallel walker whose worker threads pull directories from a
shared work queue. For the same tree both send the same set of accepted
paths; only the order differs.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from pmv.core.models import Accepted, ScanError
from pmv.scanning.channel import Sender
from pmv.scanning.classifier import is_text_file
from pmv.scanning.ignore import IgnoreRules

logger = logging.getLogger(__name__)

WorkItem = tuple[Path, IgnoreRules]


def describe_error(e: OSError, path: Path) -> str:
    """Format a per-entry OS error for the scan output."""
    reason = e.strerror or str(e)
    return f"IO error for operation on {path}: {reason}"


def scan_directory(directory: Path, rules: IgnoreRules, sender: Sender) -> list[WorkItem]:
    """Scan one directory level.

    Text files are sent as Accepted, failures as ScanError. Nothing here
    raises for filesystem problems; they all become ScanError entries.

    Args:
        directory: Directory to list
        rules: Ignore rules inherited from the parents of directory
        sender: Where results go

    Returns:
        Subdirectories still to visit, with the rules that apply inside them
    """
    try:
        rules = rules.enter(directory)
    except OSError as e:
        sender.send(ScanError(describe_error(e, directory), directory))

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        sender.send(ScanError(describe_error(e, directory), directory))
        return []

    subdirs: list[WorkItem] = []
    for entry in entries:
        path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=False):
                if not rules.is_ignored(path, is_dir=True):
                    subdirs.append((path, rules))
            elif entry.is_file(follow_symlinks=False):
                if not rules.is_ignored(path, is_dir=False) and is_text_file(path):
                    sender.send(Accepted(path))
        except OSError as e:
            sender.send(ScanError(describe_error(e, path), path))
    return subdirs


class Walker(ABC):
    """Strategy for walking a tree into a scan channel."""

    def __init__(self, hidden: bool = True, ignore_files: bool = True) -> None:
        self.hidden = hidden
        self.ignore_files = ignore_files

    def root_rules(self, root: Path) -> IgnoreRules:
        """Ignore rules in effect at the top of the walk."""
        return IgnoreRules.for_root(root, hidden=self.hidden, ignore_files=self.ignore_files)

    @abstractmethod
    def walk(self, root: Path, sender: Sender) -> None:
        """Send every text file beneath root.

        Args:
            root: Directory to walk
            sender: Sender owned by the caller; the caller closes it
        """


class SerialWalker(Walker):
    """Single-threaded depth-first walk in sorted name order."""

    def walk(self, root: Path, sender: Sender) -> None:
        stack: list[WorkItem] = [(root, self.root_rules(root))]
        while stack:
            directory, rules = stack.pop()
            subdirs = scan_directory(directory, rules, sender)
            stack.extend(reversed(subdirs))


class ParallelWalker(Walker):
    """Multi-threaded walk over a shared queue of directories.

    Each worker owns a clone of the caller's sender and closes it when it
    exits, so the channel closes only after every worker is done and the
    caller has closed its own sender.
    """

    def __init__(self, threads: int, hidden: bool = True, ignore_files: bool = True) -> None:
        super().__init__(hidden=hidden, ignore_files=ignore_files)
        if threads < 1:
            raise ValueError(f"ParallelWalker needs at least one thread, got {threads}")
        self.threads = threads

    def walk(self, root: Path, sender: Sender) -> None:
        work: queue.Queue[WorkItem | None] = queue.Queue()
        failures: list[BaseException] = []
        work.put((root, self.root_rules(root)))

        workers = [
            threading.Thread(
                target=self._work,
                args=(work, sender.clone(), failures),
                name=f"pmv-walker-{i}",
                daemon=True,
            )
            for i in range(self.threads)
        ]
        logger.debug(f"Starting {len(workers)} walker threads under {root}")
        for worker in workers:
            worker.start()

        # Subdirectories are queued before their parent is marked done, so
        # join() returns only once the whole tree has been visited
        work.join()
        for _ in workers:
            work.put(None)
        for worker in workers:
            worker.join()

        if failures:
            raise failures[0]

    def _work(self, work: queue.Queue[WorkItem | None], sender: Sender, failures: list[BaseException]) -> None:
        try:
            while True:
                item = work.get()
                if item is None:
                    work.task_done()
                    return
                try:
                    directory, rules = item
                    for child in scan_directory(directory, rules, sender):
                        work.put(child)
                except Exception as e:
                    logger.debug(f"Walker thread failed on {item[0]}: {e}")
                    failures.append(e)
                finally:
                    work.task_done()
        finally:
            sender.close()


def available_parallelism() -> int:
    """Number of CPUs usable by this process, 1 if unknown."""
    if hasattr(os, "process_cpu_count"):
        count = os.process_cpu_count()
    elif hasattr(os, "sched_getaffinity"):
        count = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count()
    return count or 1


def select_walker(threads: int | None = None, hidden: bool = True, ignore_files: bool = True) -> Walker:
    """Pick the walk strategy for this run.

    Args:
        threads: Worker count; detected from the hardware when None
        hidden: Skip hidden entries
        ignore_files: Honor ignore files

    Returns:
        ParallelWalker when more than one thread is available, else SerialWalker
    """
    n_threads = threads if threads is not None else available_parallelism()
    if n_threads > 1:
        logger.debug(f"Using parallel walker with {n_threads} threads")
        return ParallelWalker(n_threads, hidden=hidden, ignore_files=ignore_files)
    logger.debug("Using serial walker")
    return SerialWalker(hidden=hidden, ignore_files=ignore_files)
