"""Tests for wordscan.streams and wordscan.cancellation."""

from __future__ import annotations

import signal
import threading
import time

import pytest

from wordscan.cancellation import CancellationToken, interrupt_handler
from wordscan.streams import Channel, ChannelClosedError


def test_channel_drains_buffered_items_after_close() -> None:
    channel: Channel[int] = Channel(3)
    for value in (1, 2, 3):
        assert channel.put(value) is True
    channel.close()

    assert list(channel) == [1, 2, 3]
    assert channel.get() == (None, False)


def test_channel_rejects_double_close_and_put_after_close() -> None:
    channel: Channel[int] = Channel(1)
    channel.close()

    with pytest.raises(ChannelClosedError):
        channel.close()
    with pytest.raises(ChannelClosedError):
        channel.put(1)


def test_put_blocks_until_consumer_makes_room() -> None:
    channel: Channel[int] = Channel(1)
    channel.put(1)
    delivered = threading.Event()

    def _producer() -> None:
        channel.put(2)
        delivered.set()

    thread = threading.Thread(target=_producer)
    thread.start()
    assert not delivered.wait(0.1)

    assert channel.get() == (1, True)
    thread.join(timeout=2)
    assert delivered.is_set()
    assert channel.get() == (2, True)


def test_cancellation_unblocks_waiting_put_and_get() -> None:
    token = CancellationToken()
    full: Channel[int] = Channel(1)
    full.put(0)
    empty: Channel[int] = Channel(1)
    outcomes: dict[str, object] = {}

    def _put() -> None:
        outcomes["put"] = full.put(1, token)

    def _get() -> None:
        outcomes["get"] = empty.get(token)

    threads = [threading.Thread(target=_put), threading.Thread(target=_get)]
    for thread in threads:
        thread.start()
    time.sleep(0.1)
    token.cancel()
    for thread in threads:
        thread.join(timeout=2)

    assert outcomes == {"put": False, "get": (None, False)}


def test_cancellation_token_is_idempotent() -> None:
    token = CancellationToken()
    assert token.cancelled is False
    assert token.wait(0) is False

    token.cancel()
    token.cancel()

    assert token.cancelled is True
    assert token.wait(0) is True


def test_interrupt_handler_cancels_token_and_restores_handler() -> None:
    previous = signal.getsignal(signal.SIGINT)
    token = CancellationToken()

    with interrupt_handler(token) as active:
        assert active is token
        assert signal.getsignal(signal.SIGINT) is not previous
        signal.raise_signal(signal.SIGINT)
        assert token.wait(2) is True

    assert signal.getsignal(signal.SIGINT) is previous


def test_interrupt_handler_passes_through_off_main_thread() -> None:
    previous = signal.getsignal(signal.SIGINT)
    token = CancellationToken()
    observed: dict[str, object] = {}

    def _run() -> None:
        with interrupt_handler(token) as active:
            observed["token"] = active
            observed["handler"] = signal.getsignal(signal.SIGINT)

    thread = threading.Thread(target=_run)
    thread.start()
    thread.join(timeout=2)

    assert observed == {"token": token, "handler": previous}
    assert token.cancelled is False
