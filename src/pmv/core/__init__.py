"""Core rename pipeline for pmv."""

from pmv.core.errors import (
    DestinationExistsError,
    EmptyPathError,
    InvalidNameError,
    NotADirectoryError,
    PmvError,
    ReadError,
    RenameError,
    ResolutionError,
    RewriteError,
    WriteError,
)
from pmv.core.models import Accepted, Directory, Replacement, ScanEntry, ScanError, ScanReport

__all__ = [
    "Accepted",
    "DestinationExistsError",
    "Directory",
    "EmptyPathError",
    "InvalidNameError",
    "NotADirectoryError",
    "PmvError",
    "ReadError",
    "RenameError",
    "Replacement",
    "ResolutionError",
    "RewriteError",
    "ScanEntry",
    "ScanError",
    "ScanReport",
    "WriteError",
]
