"""Bounded message channels connecting pipeline stages."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, Tuple, TypeVar

from .cancellation import CancellationToken

T = TypeVar("T")

# How often blocked callers re-check their cancellation token.
_POLL_INTERVAL = 0.05


class ChannelClosedError(RuntimeError):
    """Raised when sending on, or closing, an already closed channel."""


class Channel(Generic[T]):
    """FIFO queue with a fixed capacity and close-once semantics.

    The stage that owns a channel's sending side closes it exactly once, after
    its last ``put``. Receivers keep draining buffered items after close and
    observe end-of-stream only when the buffer is empty.
    """

    def __init__(self, capacity: int = 1, *, name: str = "channel") -> None:
        self.capacity = max(1, capacity)
        self.name = name
        self._items: Deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def put(self, item: T, cancel: Optional[CancellationToken] = None) -> bool:
        """Enqueue ``item``, blocking while full.

        Returns False, leaving the item undelivered, when ``cancel`` fires
        before space becomes available.
        """
        with self._cond:
            while True:
                if self._closed:
                    raise ChannelClosedError(f"put on closed channel '{self.name}'")
                if cancel is not None and cancel.cancelled:
                    return False
                if len(self._items) < self.capacity:
                    break
                self._cond.wait(_POLL_INTERVAL if cancel is not None else None)
            self._items.append(item)
            self._cond.notify_all()
            return True

    def get(self, cancel: Optional[CancellationToken] = None) -> Tuple[Optional[T], bool]:
        """Dequeue the next item as ``(item, True)``.

        Returns ``(None, False)`` once the channel is closed and drained, or
        when ``cancel`` fires while waiting.
        """
        with self._cond:
            while True:
                if cancel is not None and cancel.cancelled:
                    return None, False
                if self._items:
                    item = self._items.popleft()
                    self._cond.notify_all()
                    return item, True
                if self._closed:
                    return None, False
                self._cond.wait(_POLL_INTERVAL if cancel is not None else None)

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosedError(f"channel '{self.name}' closed twice")
            self._closed = True
            self._cond.notify_all()

    def iterate(self, cancel: Optional[CancellationToken] = None) -> Iterator[T]:
        """Yield items until end-of-stream or cancellation."""
        while True:
            item, ok = self.get(cancel)
            if not ok:
                return
            yield item  # type: ignore[misc]

    def __iter__(self) -> Iterator[T]:
        return self.iterate()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)


__all__ = ["Channel", "ChannelClosedError"]
