"""Runtime settings for a pmv run."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pmv.scanning.channel import DEFAULT_CAPACITY


class RenameConfig(BaseModel):
    """Settings for one rename run.

    Built from command-line flags; pmv reads no configuration file and no
    environment variables.
    """

    threads: int | None = Field(
        default=None,
        ge=1,
        description="Walker threads; detected from available CPUs when unset. 1 forces the serial walker.",
    )
    channel_capacity: int = Field(
        default=DEFAULT_CAPACITY,
        ge=1,
        description="Maximum scan results in flight between walkers and the collector",
    )
    hidden: bool = Field(default=True, description="Skip hidden files and directories")
    respect_ignore_files: bool = Field(default=True, description="Honor .gitignore, .ignore and .git/info/exclude")
    remote: bool = Field(default=True, description="Rename the GitHub repository with `gh` afterwards")
    remote_timeout: int = Field(default=60, ge=1, description="Timeout for the `gh` call in seconds")
    dry_run: bool = Field(default=False, description="Resolve and validate only, change nothing")
