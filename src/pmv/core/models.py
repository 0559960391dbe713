"""Core data models for pmv."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Directory:
    """A resolved project directory.

    Attributes:
        path: Absolute, canonical path of the directory
        name: Leaf component of path (the current project name)
    """

    path: Path
    name: str

    def __str__(self) -> str:
        return str(self.path)


# =============================================================================
# Scan results
# =============================================================================


@dataclass(frozen=True)
class Accepted:
    """A regular file that was classified as text."""

    path: Path


@dataclass(frozen=True)
class ScanError:
    """A per-entry failure encountered while walking the tree.

    Scan errors are reported but never abort the walk.
    """

    description: str
    path: Path | None = field(default=None)

    def __str__(self) -> str:
        return self.description


ScanEntry = Accepted | ScanError


@dataclass(frozen=True)
class Replacement:
    """A literal old-name to new-name substitution."""

    old: str
    new: str

    def apply(self, text: str) -> str:
        """Replace every non-overlapping occurrence of old with new, left to right."""
        if not self.old:
            return text
        return text.replace(self.old, self.new)


@dataclass
class ScanReport:
    """Outcome of the scan and rewrite phases.

    Attributes:
        accepted: Text files collected, in channel arrival order
        errors: Number of per-entry scan errors reported
        rewritten: Number of files whose contents actually changed
    """

    accepted: list[Path] = field(default_factory=list)
    errors: int = 0
    rewritten: int = 0
