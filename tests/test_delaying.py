# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import asyncio
import threading
import time

import pytest

from underbar import delay
from underbar import delaying


def test_delay_on_thread():
    event = threading.Event()
    received = []

    def callback(*args):
        received.append(args)
        event.set()

    delay(callback, 0, 'a', 'b')
    assert event.wait(timeout=10)
    assert received == [('a', 'b')]


def test_delay_runs_after_return_off_event_loop():
    seen_returned = []
    for _ in range(200):
        event = threading.Event()
        returned = []

        def callback():
            seen_returned.append(bool(returned))
            event.set()

        delay(callback, 0)
        returned.append(True)
        assert event.wait(timeout=10)
    assert seen_returned == [True] * 200


def test_delay_wait_for_pending():
    calls = []
    delay(calls.append, 100, 'x')
    delay(calls.append, 0, 'y')
    assert delaying.get_delay_thread().wait_for_pending(timeout=10)
    assert calls == ['y', 'x']


def test_delay_from_delayed_call():
    event = threading.Event()
    calls = []

    def first():
        calls.append('first')
        delay(second, 0)

    def second():
        calls.append('second')
        event.set()

    delay(first, 0)
    assert event.wait(timeout=10)
    assert calls == ['first', 'second']


def test_delay_waits():
    event = threading.Event()
    fired_at = []

    def callback():
        fired_at.append(time.monotonic())
        event.set()

    start_time = time.monotonic()
    delay(callback, 200)
    assert not event.is_set()
    assert event.wait(timeout=10)
    assert fired_at[0] - start_time >= 0.19


def test_delay_on_event_loop():
    calls = []

    async def main():
        delay(calls.append, 0, 'x')
        assert calls == []
        await asyncio.sleep(0.1)
        assert calls == ['x']

    asyncio.run(main())


def test_delay_on_event_loop_waits():
    calls = []

    async def main():
        delay(calls.append, 200, 'x')
        await asyncio.sleep(0.05)
        assert calls == []
        await asyncio.sleep(0.4)
        assert calls == ['x']

    asyncio.run(main())


def test_delay_returns_nothing():
    event = threading.Event()
    assert delay(event.set, 0) is None
    assert event.wait(timeout=10)


@pytest.mark.parametrize('wait_ms', (-1, float('nan'), float('inf'), '100'))
def test_delay_bad_wait(wait_ms):
    with pytest.raises(ValueError):
        delay(print, wait_ms)


def test_delay_exception_off_event_loop():
    event = threading.Event()
    contexts = []

    def exception_handler(loop, context):
        contexts.append(context)
        event.set()

    def explode():
        raise ZeroDivisionError

    delay_thread = delaying.get_delay_thread()
    delay_thread.loop.set_exception_handler(exception_handler)
    try:
        delay(explode, 0)
        assert event.wait(timeout=10)
    finally:
        delay_thread.loop.set_exception_handler(None)
    (context,) = contexts
    assert isinstance(context['exception'], ZeroDivisionError)
    assert delay_thread.wait_for_pending(timeout=10)


def test_delay_exception_on_event_loop():
    contexts = []

    def explode():
        raise ZeroDivisionError

    async def main():
        asyncio.get_running_loop().set_exception_handler(
            lambda loop, context: contexts.append(context)
        )
        delay(explode, 0)
        await asyncio.sleep(0.1)

    asyncio.run(main())
    (context,) = contexts
    assert isinstance(context['exception'], ZeroDivisionError)
