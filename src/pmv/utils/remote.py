"""Best-effort rename of the project's GitHub repository via the `gh` CLI."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class RemoteRenameResult:
    """Outcome of a `gh repo rename` call.

    Attributes:
        success: True if gh exited with status 0
        error: Description of the failure, None on success
    """

    success: bool
    error: str | None = None


def build_rename_command(new_name: str) -> list[str]:
    """Build the gh invocation that renames the current repository."""
    return ["gh", "repo", "rename", new_name, "--yes"]


def rename_remote_repo(new_name: str, cwd: Path | None = None, timeout: int = 60) -> RemoteRenameResult:
    """Rename the GitHub repository of the project in cwd.

    Failures are returned, never raised: a missing gh binary, a directory
    that is not a GitHub checkout, or a timeout must not fail the run.

    Args:
        new_name: New repository name
        cwd: Project directory. Defaults to current directory.
        timeout: Seconds to wait for gh

    Returns:
        RemoteRenameResult describing what happened
    """
    command = build_rename_command(new_name)
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            cwd=cwd or Path.cwd(),
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        # gh not installed
        return RemoteRenameResult(success=False, error="gh command not found")
    except subprocess.TimeoutExpired:
        return RemoteRenameResult(success=False, error=f"gh timed out after {timeout}s")
    except OSError as e:
        return RemoteRenameResult(success=False, error=str(e))

    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip() or f"exit status {result.returncode}"
        logger.warning(f"gh repo rename failed: {detail}")
        return RemoteRenameResult(success=False, error=f"command `{' '.join(command)}` failed: {detail}")

    logger.debug(f"Renamed GitHub repository to {new_name}")
    return RemoteRenameResult(success=True)
