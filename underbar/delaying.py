# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Fire-and-forget deferred calls.'''

from __future__ import annotations

import asyncio
import atexit
import logging
import math
import numbers
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class DelayThread(threading.Thread):
    '''
    A background thread running an event loop for calls scheduled outside of any event loop.

    Each call waits for a `released_event` before running, which `delay` sets just before it
    returns.
    '''
    def __init__(self) -> None:
        threading.Thread.__init__(self, name='underbar-delay', daemon=True)
        self.loop = asyncio.new_event_loop()
        self.pending_condition = threading.Condition()
        self.n_pending = 0
        self.start()

    def run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def schedule(self, wait_seconds: float, func: Callable, args: tuple,
                 released_event: threading.Event) -> None:
        with self.pending_condition:
            self.n_pending += 1
        self.loop.call_soon_threadsafe(self.loop.call_later, wait_seconds, self._run, func,
                                       args, released_event)

    def _run(self, func: Callable, args: tuple, released_event: threading.Event) -> None:
        released_event.wait()
        try:
            func(*args)
        finally:
            with self.pending_condition:
                self.n_pending -= 1
                self.pending_condition.notify_all()

    def wait_for_pending(self, timeout: Optional[float] = None) -> bool:
        with self.pending_condition:
            return self.pending_condition.wait_for(lambda: self.n_pending == 0, timeout)


delay_thread: Optional[DelayThread] = None
_delay_thread_lock = threading.Lock()

def get_delay_thread() -> DelayThread:
    global delay_thread
    with _delay_thread_lock:
        if delay_thread is None:
            delay_thread = DelayThread()
        return delay_thread


def _get_running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def delay(func: Callable, wait_ms: numbers.Real, /, *args: Any) -> None:
    '''
    Call `func(*args)` once, no earlier than `wait_ms` milliseconds from now.

    For example, `delay(some_function, 500, 'a', 'b')` calls `some_function('a', 'b')` after half
    a second. There's no way to cancel the call.

    When called inside a running asyncio event loop, the call is scheduled on that loop, so it
    can't happen before `delay` returns. Otherwise it's scheduled on a background event loop
    thread, and held back until `delay` has finished. Either way, any exception the call raises
    goes to the exception handler of the loop that ran it. The interpreter waits for pending calls
    of the background thread before exiting.
    '''
    if not (isinstance(wait_ms, numbers.Real) and math.isfinite(wait_ms) and wait_ms >= 0):
        raise ValueError(f'`wait_ms` must be a finite non-negative number, got {wait_ms!r}.')
    wait_seconds = wait_ms / 1000
    func_name = getattr(func, '__qualname__', repr(func))

    loop = _get_running_loop()
    if loop is not None and threading.current_thread() is not delay_thread:
        logger.debug(f'Scheduling {func_name} on the event loop in {wait_ms} ms.')
        loop.call_later(wait_seconds, func, *args)
    else:
        logger.debug(f'Scheduling {func_name} on the delay thread in {wait_ms} ms.')
        released_event = threading.Event()
        try:
            get_delay_thread().schedule(wait_seconds, func, args, released_event)
        finally:
            released_event.set()


@atexit.register
def _wait_for_delayed_calls() -> None:
    if delay_thread is not None:
        delay_thread.wait_for_pending()
        delay_thread.loop.call_soon_threadsafe(delay_thread.loop.stop)
