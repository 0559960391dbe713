"""Rename the project directory on disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from pmv.core.errors import DestinationExistsError, InvalidNameError, RenameError
from pmv.core.models import Directory

logger = logging.getLogger(__name__)


def validate_new_name(new_name: str) -> str:
    """Check that new_name can be used as a sibling directory name.

    Raises:
        InvalidNameError: If the name is empty, `.`/`..`, or contains a separator
    """
    if not new_name:
        raise InvalidNameError("New project name is empty.")
    if new_name in (".", ".."):
        raise InvalidNameError(f"New project name cannot be {new_name!r}.")
    separators = {os.sep, os.altsep} - {None}
    if any(sep in new_name for sep in separators):
        raise InvalidNameError(f"New project name {new_name!r} must not contain a path separator.")
    return new_name


def destination_for(source: Directory, new_name: str) -> Path:
    """Compute the sibling path the project will be moved to.

    Raises:
        RenameError: If source has no parent (a filesystem root)
    """
    parent = source.path.parent
    if parent == source.path:
        raise RenameError(f"Cannot rename {source.path}: it has no parent directory.")
    return parent / new_name


def rename_directory(source: Directory, new_name: str, console: Console | None = None) -> Path:
    """Move source to a sibling directory called new_name.

    Nothing on disk changes unless every precondition holds. If the
    destination equals the source the rename is skipped.

    Args:
        source: The resolved project directory
        new_name: New leaf name
        console: Console for user-facing messages

    Returns:
        The destination path

    Raises:
        InvalidNameError: If new_name is unusable
        DestinationExistsError: If the destination already exists
        RenameError: If the OS rename fails
    """
    console = console or Console()
    validate_new_name(new_name)
    destination = destination_for(source, new_name)

    if destination == source.path:
        console.print("New path is the same as current path.")
        return destination
    if os.path.lexists(destination):
        raise DestinationExistsError(destination)

    console.print(f"Moving from {escape(str(source.path))} to {escape(str(destination))}.", soft_wrap=True)
    try:
        os.rename(source.path, destination)
    except OSError as e:
        raise RenameError(f"Failed to rename {source.path} to {destination}: {e}") from e

    logger.debug(f"Renamed {source.path} -> {destination}")
    return destination
