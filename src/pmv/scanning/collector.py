"""The single consumer of the scan channel."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from rich.console import Console

from pmv.core.models import Accepted, ScanEntry
from pmv.scanning.channel import ScanChannel

logger = logging.getLogger(__name__)


class ResultCollector(threading.Thread):
    """Drain a ScanChannel, print progress, and gather accepted paths.

    This thread is the only writer to the console during the scan and the
    only owner of the path list until join() hands it back. Start it
    before any producer sends, otherwise producers block once the buffer
    fills up.
    """

    def __init__(self, channel: ScanChannel, console: Console | None = None) -> None:
        super().__init__(name="pmv-collector", daemon=True)
        self.channel = channel
        self.console = console or Console()
        self.paths: list[Path] = []
        self.accepted_count = 0
        self.error_count = 0
        self._error: BaseException | None = None

    def run(self) -> None:
        for entry in self.channel:
            try:
                self._handle(entry)
            except Exception as e:
                # Keep draining so producers never block on a dead consumer
                if self._error is None:
                    self._error = e
                logger.debug(f"Collector failed to handle {entry!r}: {e}")

    def _handle(self, entry: ScanEntry) -> None:
        if isinstance(entry, Accepted):
            self.paths.append(entry.path)
            self.accepted_count += 1
            self.console.print(f"renaming: {entry.path}", markup=False, highlight=False, soft_wrap=True)
        else:
            self.error_count += 1
            self.console.print(entry.description, markup=False, highlight=False, soft_wrap=True)

    def join(self, timeout: float | None = None) -> list[Path]:  # type: ignore[override]
        """Wait for the channel to close and return the accepted paths.

        Raises:
            Exception: Whatever first went wrong while handling entries
        """
        super().join(timeout)
        if self._error is not None:
            raise self._error
        return self.paths
