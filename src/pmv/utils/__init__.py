"""Utility modules for pmv."""

from pmv.utils.remote import (
    RemoteRenameResult,
    build_rename_command,
    rename_remote_repo,
)

__all__ = [
    "RemoteRenameResult",
    "build_rename_command",
    "rename_remote_repo",
]
