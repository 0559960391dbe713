"""Bounded multi-producer, single-consumer channel for scan results.

Producers each hold a Sender. The channel closes once the last sender is
closed, at which point iteration on the consumer side ends after draining
everything already sent. Senders block while the buffer is full.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from types import TracebackType

from pmv.core.errors import ChannelClosedError
from pmv.core.models import ScanEntry

DEFAULT_CAPACITY = 100

_CLOSED = object()


class ScanChannel:
    """A fixed-capacity channel carrying ScanEntry values to one consumer."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Channel capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._lock = threading.Lock()
        self._senders = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once every sender has been closed."""
        return self._closed

    def sender(self) -> Sender:
        """Register and return a new sender.

        Raises:
            ChannelClosedError: If all previous senders are already closed
        """
        with self._lock:
            if self._closed:
                raise ChannelClosedError("Cannot open a sender on a closed channel.")
            self._senders += 1
        return Sender(self)

    def _put(self, entry: ScanEntry) -> None:
        self._queue.put(entry)

    def _release(self) -> None:
        with self._lock:
            self._senders -= 1
            last = self._senders == 0
            if last:
                self._closed = True
        if last:
            # May block on a full buffer until the consumer catches up
            self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[ScanEntry]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]


class Sender:
    """Producer handle for a ScanChannel. Use as a context manager."""

    def __init__(self, channel: ScanChannel) -> None:
        self._channel = channel
        self._closed = False

    def send(self, entry: ScanEntry) -> None:
        """Send one entry, blocking while the channel is full.

        The entry is handed off; the caller should not keep using it.

        Raises:
            ChannelClosedError: If this sender has been closed
        """
        if self._closed:
            raise ChannelClosedError("Cannot send on a closed sender.")
        self._channel._put(entry)

    def clone(self) -> Sender:
        """Open another sender on the same channel."""
        if self._closed:
            raise ChannelClosedError("Cannot clone a closed sender.")
        return self._channel.sender()

    def close(self) -> None:
        """Close this sender. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._channel._release()

    def __enter__(self) -> Sender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
