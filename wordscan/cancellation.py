"""Cooperative cancellation shared by every pipeline stage."""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .logging import get_logger

_LOGGER = get_logger("cancellation")


class CancellationToken:
    """A one-shot, process-wide stop signal observed at stream boundaries."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Trigger the signal. Safe to call any number of times from any thread."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return the cancelled state."""
        return self._event.wait(timeout)


@contextmanager
def interrupt_handler(token: CancellationToken) -> Iterator[CancellationToken]:
    """Route SIGINT to ``token`` for the duration of the block.

    Signal handlers can only be installed from the main thread; elsewhere the
    token is yielded untouched.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handle(signum, frame) -> None:
        if not token.cancelled:
            _LOGGER.warning("Interrupt received; stopping after in-flight files")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handle)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


__all__ = ["CancellationToken", "interrupt_handler"]
