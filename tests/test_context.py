import signal

import pytest

from tferun.cli.common.context import install_cancel_handlers


@pytest.fixture
def restore_handlers():
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


@pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
def test_first_signal_sets_cancel_and_restores_defaults(restore_handlers, signum):
    cancel = install_cancel_handlers()

    signal.getsignal(signum)(signum, None)

    assert cancel.is_set()
    assert signal.getsignal(signal.SIGINT) is signal.default_int_handler
    assert signal.getsignal(signal.SIGTERM) == signal.SIG_DFL
