"""Exception hierarchy for pmv.

Every fatal failure in a run derives from PmvError so the CLI can report it
and exit non-zero. Per-entry scan failures are not exceptions; they travel
through the scan channel as ScanError values.
"""

from __future__ import annotations

from pathlib import Path


class PmvError(Exception):
    """Base exception for pmv errors."""


class ResolutionError(PmvError):
    """The input project path could not be resolved."""


class EmptyPathError(ResolutionError):
    """The resolved path has no leaf component (e.g. the filesystem root)."""


class NotADirectoryError(ResolutionError):  # noqa: A001
    """The resolved path exists but is not a directory."""


class InvalidNameError(PmvError):
    """The new project name cannot be used as a sibling directory name."""


class DestinationExistsError(PmvError):
    """The rename destination already exists."""

    def __init__(self, destination: Path) -> None:
        super().__init__(f"{destination} already exists!")
        self.destination = destination


class RenameError(PmvError):
    """The OS-level directory rename failed."""


class RewriteError(PmvError):
    """Base for failures while rewriting file contents."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ReadError(RewriteError):
    """A collected file could not be read back as text."""


class WriteError(RewriteError):
    """New contents could not be written back to a file."""


class ChannelClosedError(PmvError):
    """A result was sent on a sender that has already been closed."""
