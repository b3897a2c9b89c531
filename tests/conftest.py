from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


class RecordingObserver:
    """RunObserver that keeps every event as a tuple."""

    def __init__(self):
        self.events: list[tuple] = []

    def vars_file_created(self, path):
        self.events.append(("vars_file_created", path))

    def vars_file_cleanup_failed(self, path, exc):
        self.events.append(("vars_file_cleanup_failed", path))

    def upload_started(self, directory):
        self.events.append(("upload_started", directory))

    def upload_finished(self):
        self.events.append(("upload_finished",))

    def configuration_processed(self, configuration_version_id):
        self.events.append(("configuration_processed", configuration_version_id))

    def run_created(self, run_id, run_url):
        self.events.append(("run_created", run_id, run_url))

    def wait_skipped(self, reason):
        self.events.append(("wait_skipped", reason))

    def run_status_changed(self, status):
        self.events.append(("run_status_changed", status))

    def named(self, name: str) -> list[tuple]:
        return [e for e in self.events if e[0] == name]


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
