"""Bounded-time polling.

`poll` is pure scheduling glue: it knows nothing about Terraform Cloud. Sleeps
are done on a `threading.Event` so a signal handler can interrupt them.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from tferun.core.errors import PollCancelledError, PollTimeoutError


def poll(
    check: Callable[[], bool],
    *,
    interval: float,
    timeout: float,
    cancel: threading.Event | None = None,
    operation: str = "polling",
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """
    Call `check` every `interval` seconds until it returns True.

    The first call happens after one interval has elapsed. Exceptions raised
    by `check` are not caught and end polling immediately.

    Args:
        check: Returns True when the awaited condition holds.
        interval: Seconds to wait before each call.
        timeout: Maximum seconds since the start of polling.
        cancel: Event that, once set, stops polling before the next call.
        operation: Describes what is awaited, used in error messages.
        clock: Monotonic clock, injectable for tests.

    Raises:
        PollCancelledError: `cancel` was set. Checked before every call and
            before the timeout.
        PollTimeoutError: `check` did not succeed within `timeout`.
    """
    cancel = cancel or threading.Event()
    start = clock()

    while True:
        if cancel.wait(interval):
            raise PollCancelledError(operation)

        if check():
            return

        if cancel.is_set():
            raise PollCancelledError(operation)
        if clock() - start > timeout:
            raise PollTimeoutError(timeout, operation)
