"""Resolve a user-supplied project path into a canonical Directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pmv.core.errors import EmptyPathError, NotADirectoryError, ResolutionError
from pmv.core.models import Directory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputDir:
    """A raw project path argument, tagged as absolute or relative."""

    path: Path
    is_absolute: bool

    @classmethod
    def parse(cls, raw: str) -> InputDir:
        """Tag a raw path string as absolute or relative.

        Args:
            raw: Path exactly as the user typed it

        Returns:
            InputDir for the raw string

        Raises:
            ResolutionError: If the string is empty
        """
        if not raw:
            raise ResolutionError("Input path is empty.")
        path = Path(raw)
        return cls(path=path, is_absolute=path.is_absolute())

    def canonicalize(self, cwd: Path) -> Directory:
        """Join with cwd when relative, then resolve symlinks and `..`.

        Args:
            cwd: Working directory used for relative input

        Returns:
            Directory with the canonical path and its leaf name

        Raises:
            ResolutionError: If the path cannot be canonicalized
            EmptyPathError: If the canonical path has no leaf component
            NotADirectoryError: If the path exists but is not a directory
        """
        candidate = self.path if self.is_absolute else cwd / self.path
        try:
            path = candidate.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise ResolutionError(f"Failed to canonicalize input path {self.path}: {e}") from e

        name = path.name
        if not name:
            raise EmptyPathError(f"Input path {path} is empty!")
        if not path.is_dir():
            raise NotADirectoryError(f"Path {path} already exists, but it is not a directory.")

        try:
            name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ResolutionError(f"Could not convert name of the existing project ({path}) to a string.") from e

        logger.debug(f"Resolved {self.path} -> {path} (name={name!r})")
        return Directory(path=path, name=name)


def resolve_directory(raw: str, cwd: Path | None = None) -> Directory:
    """Parse and canonicalize a raw project path in one step."""
    return InputDir.parse(raw).canonicalize(cwd or Path.cwd())
