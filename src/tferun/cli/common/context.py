"""Application context management for the CLI."""

from __future__ import annotations

import signal
import threading
from dataclasses import dataclass

from tferun.cli.common.exits import die
from tferun.core.adapters.terraformcloud import TerraformCloudAdapter
from tferun.core.auth import get_session, resolve_workspace, sanitize_hostname
from tferun.core.errors import AuthError
from tferun.core.models import Workspace


@dataclass
class RunAppContext:
    """Application context holding the Terraform Cloud adapter and resolved workspace."""

    hostname: str
    adapter: TerraformCloudAdapter
    workspace: Workspace


def build_run_context(
    token: str, hostname: str | None, organization: str, workspace: str
) -> RunAppContext:
    """Build and return the application context with an adapter and the workspace.

    The workspace is read once here and reused for the rest of the invocation.
    """
    host = sanitize_hostname(hostname)
    try:
        adapter = TerraformCloudAdapter(get_session(token), hostname=host)
        ws = resolve_workspace(adapter, organization, workspace)
    except AuthError as exc:
        die(str(exc), code=1)
    return RunAppContext(hostname=host, adapter=adapter, workspace=ws)


def install_cancel_handlers() -> threading.Event:
    """
    Return an event that is set on SIGINT or SIGTERM.

    Waits in the core stop at their next tick once it is set. Remote runs
    are left running. The first signal restores the default handlers, so a
    second one aborts immediately, even inside a blocking HTTP call.
    """
    cancel = threading.Event()

    def _handler(signum, frame):
        cancel.set()
        signal.signal(signal.SIGINT, signal.default_int_handler)
        signal.signal(signal.SIGTERM, signal.SIG_DFL)

    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)
    return cancel
