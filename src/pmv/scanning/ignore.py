"""Gitignore-style ignore rules for the tree walk.

Rules are layered: each directory adds the patterns from its own
`.gitignore` and `.ignore` files on top of the rules inherited from its
parents. The deepest layer with an opinion about a path wins, so a
`!pattern` in a subdirectory can re-include something a parent ignored.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

IGNORE_FILENAMES = (".gitignore", ".ignore")


@dataclass(frozen=True)
class IgnoreLayer:
    """Patterns loaded from ignore files in one directory."""

    base: Path
    spec: pathspec.GitIgnoreSpec

    def check(self, path: Path, is_dir: bool) -> bool | None:
        """Return True/False if a pattern decides path, None if none matches."""
        try:
            rel = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if is_dir:
            rel += "/"
        return self.spec.check_file(rel).include


def read_ignore_file(path: Path) -> list[str]:
    """Read the patterns of an ignore file.

    Raises:
        OSError: If the file exists but cannot be read
    """
    with path.open(encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in f]


@dataclass(frozen=True)
class IgnoreRules:
    """Ignore rules in effect for the contents of one directory.

    Attributes:
        hidden: Skip entries whose name starts with a dot
        ignore_files: Honor .gitignore/.ignore/.git/info/exclude
        layers: Pattern layers, shallowest first
    """

    hidden: bool = True
    ignore_files: bool = True
    layers: tuple[IgnoreLayer, ...] = field(default=())

    @classmethod
    def for_root(cls, root: Path, hidden: bool = True, ignore_files: bool = True) -> IgnoreRules:
        """Build the rules that apply at the top of a walk.

        Ignore files in the directories above root are layered in, outermost
        first, up to the enclosing repository root or the filesystem root
        when root is not inside a repository. `.git/info/exclude` is read
        from the repository root.
        """
        rules = cls(hidden=hidden, ignore_files=ignore_files)
        if not ignore_files:
            return rules

        repository = find_repository_root(root)
        top = repository or root
        exclude = top / ".git" / "info" / "exclude"
        try:
            lines = read_ignore_file(exclude) if exclude.is_file() else []
        except OSError as e:
            logger.debug(f"Could not read {exclude}: {e}")
            lines = []
        rules = rules._with_lines(top, lines)

        for parent in _ancestors(root, repository):
            try:
                rules = rules.enter(parent)
            except OSError as e:
                logger.debug(f"Could not read ignore files in {parent}: {e}")
        return rules

    def enter(self, directory: Path) -> IgnoreRules:
        """Return the rules for entries of directory, adding its ignore files.

        Raises:
            OSError: If an ignore file in directory exists but cannot be read
        """
        if not self.ignore_files:
            return self
        lines: list[str] = []
        for filename in IGNORE_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                lines.extend(read_ignore_file(candidate))
        return self._with_lines(directory, lines)

    def _with_lines(self, base: Path, lines: list[str]) -> IgnoreRules:
        patterns = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
        if not patterns:
            return self
        spec = pathspec.GitIgnoreSpec.from_lines(patterns)
        return IgnoreRules(
            hidden=self.hidden,
            ignore_files=self.ignore_files,
            layers=(*self.layers, IgnoreLayer(base=base, spec=spec)),
        )

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """Check whether an entry is excluded from the walk."""
        if self.hidden and path.name.startswith("."):
            return True
        for layer in reversed(self.layers):
            decision = layer.check(path, is_dir)
            if decision is not None:
                return decision
        return False


def find_repository_root(path: Path) -> Path | None:
    """Return the nearest of path and its parents that holds a `.git` entry."""
    for candidate in (path, *path.parents):
        if os.path.lexists(candidate / ".git"):
            return candidate
    return None


def _ancestors(root: Path, repository: Path | None) -> list[Path]:
    """Directories strictly above root whose ignore files apply, outermost first."""
    if repository == root:
        return []
    ancestors: list[Path] = []
    for parent in root.parents:
        ancestors.append(parent)
        if parent == repository:
            break
    return ancestors[::-1]
