"""Verification Test: Handle Leak Check.

Every status record and the process root itself must be released before
the scan moves on, on success and on every failure path. Repeated scans
must leave the open file descriptor count of this process unchanged.
"""

import gc
import io
import os

import psutil
import pytest

from conftest import status_text
from pyps.app import run
from pyps.config import Settings
from pyps.models import UserContext

USER = UserContext(uid=1000)
RUNS = 50


def get_open_fds() -> int:
    """Get the number of file descriptors open in this process."""
    return psutil.Process().num_fds()


def scan_repeatedly(settings: Settings, user: UserContext, runs: int = RUNS) -> list[int]:
    codes = []
    for _ in range(runs):
        codes.append(run(settings, user, out=io.StringIO()))
    gc.collect()
    return codes


class TestHandleLeakCheck:
    """Handle leak verification suite tests."""

    def test_successful_scans_release_handles(self, fake_proc):
        for pid in range(1, 51):
            owner = 1000 if pid % 2 else 0
            fake_proc.add_process(str(pid), status_text(f"proc{pid}", owner, f"{pid} kB"))
        fake_proc.add_directory("sys")
        fake_proc.add_directory("999")

        gc.collect()
        initial_fds = get_open_fds()

        codes = scan_repeatedly(fake_proc.settings(), USER)

        assert set(codes) == {0}
        assert get_open_fds() == initial_fds

    def test_fatal_scans_release_handles(self, fake_proc):
        """Test the root handle is released when a record cannot be opened."""
        fake_proc.add_process("1", status_text("init", 1000))
        (fake_proc.add_directory("2") / "status").mkdir()

        gc.collect()
        initial_fds = get_open_fds()

        codes = scan_repeatedly(fake_proc.settings(), USER)

        assert set(codes) == {1}
        assert get_open_fds() == initial_fds

    def test_missing_root_leaves_nothing_open(self, tmp_path):
        gc.collect()
        initial_fds = get_open_fds()

        codes = scan_repeatedly(Settings(proc_root=str(tmp_path / "missing")), USER)

        assert set(codes) == {1}
        assert get_open_fds() == initial_fds

    @pytest.mark.skipif(not os.path.isdir("/proc/self"), reason="requires /proc")
    def test_real_proc_scans_release_handles(self):
        user = UserContext.current()
        scan_repeatedly(Settings(), user, runs=5)

        gc.collect()
        initial_fds = get_open_fds()

        codes = scan_repeatedly(Settings(), user, runs=20)

        assert set(codes) == {0}
        assert get_open_fds() == initial_fds
