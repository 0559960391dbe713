"""Rewrite collected text files in place."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pmv.core.errors import ReadError, WriteError
from pmv.core.models import Replacement

logger = logging.getLogger(__name__)


def rewrite_file(path: Path, replacement: Replacement) -> bool:
    """Replace every literal occurrence of the old name in a single file.

    The file is read and written with newline translation disabled so
    everything other than the replaced substrings stays byte-identical.

    Args:
        path: Text file to rewrite
        replacement: Old/new name pair

    Returns:
        True if the contents changed

    Raises:
        ReadError: If the file cannot be read or is not valid UTF-8
        WriteError: If the new contents cannot be written back
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to open and read text file: {path} ({e})", path) from e

    updated = replacement.apply(contents)

    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except OSError as e:
        raise WriteError(f"Could not write back new contents of file: {path} ({e})", path) from e

    return updated != contents


def rewrite_files(paths: Iterable[Path], replacement: Replacement) -> int:
    """Rewrite files one at a time, stopping at the first failure.

    There is no rollback: files rewritten before a failure stay rewritten.

    Returns:
        Number of files whose contents changed
    """
    changed = 0
    for path in paths:
        if rewrite_file(path, replacement):
            changed += 1
            logger.debug(f"Rewrote {path}")
    return changed
