"""Single-consumer stream used to hand items between pipeline stages.

A :class:`Channel` is written by one or more producer threads and read by
exactly one consumer.  It holds at most one pending item, so a producer that
runs ahead of its consumer blocks on :meth:`Channel.put`.  Closing the channel
is the only end-of-stream signal: iterating a channel yields items until the
producer side calls :meth:`Channel.close`, then stops.
"""

from __future__ import annotations

import queue
import threading
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when writing to, or closing, a channel that is already closed."""


class Channel(Generic[T]):
    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        """``True`` once the producer side has closed the channel."""
        return self._closed

    def put(self, item: T) -> None:
        """Hand *item* to the consumer, blocking while the slot is occupied."""
        with self._lock:
            if self._closed:
                raise ChannelClosedError("put on closed channel")
            self._queue.put(item)

    def close(self) -> None:
        """Mark the end of the stream.  Must be called exactly once.

        Waits for any put already in progress, so no item lands after the end
        marker.
        """
        with self._lock:
            if self._closed:
                raise ChannelClosedError("channel closed twice")
            self._closed = True
            self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]
