import threading

import pytest

from tferun.core.errors import PollCancelledError, PollTimeoutError
from tferun.core.poller import poll


class _FakeClock:
    def __init__(self, step: float):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


def test_poll_returns_on_first_successful_check():
    calls = []

    def check():
        calls.append(1)
        return True

    poll(check, interval=0.001, timeout=10)

    assert len(calls) == 1


def test_poll_waits_one_interval_before_first_check():
    cancel = threading.Event()
    cancel.set()
    calls = []

    with pytest.raises(PollCancelledError):
        poll(lambda: calls.append(1) or True, interval=0.001, timeout=10, cancel=cancel)

    assert calls == []


def test_poll_times_out_when_check_never_succeeds():
    clock = _FakeClock(step=1.0)
    calls = []

    with pytest.raises(PollTimeoutError) as excinfo:
        poll(
            lambda: calls.append(1) or False,
            interval=0,
            timeout=3,
            clock=clock,
            operation="waiting for the test",
        )

    assert excinfo.value.timeout == 3
    assert "waiting for the test" in str(excinfo.value)
    assert len(calls) == 4


def test_poll_cancellation_takes_priority_over_timeout():
    cancel = threading.Event()
    clock = _FakeClock(step=100.0)

    def check():
        cancel.set()
        return False

    with pytest.raises(PollCancelledError):
        poll(check, interval=0, timeout=1, cancel=cancel, clock=clock)


def test_poll_cancellation_interrupts_wait():
    cancel = threading.Event()
    timer = threading.Timer(0.05, cancel.set)
    timer.start()
    try:
        with pytest.raises(PollCancelledError):
            poll(lambda: False, interval=30, timeout=3600, cancel=cancel)
    finally:
        timer.cancel()


def test_poll_propagates_check_errors():
    def check():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        poll(check, interval=0, timeout=10)


def test_poll_keeps_polling_until_done():
    results = iter([False, False, True])

    poll(lambda: next(results), interval=0, timeout=10)

    assert next(results, None) is None
