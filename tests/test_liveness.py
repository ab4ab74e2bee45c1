"""Tests for liveness probing"""

import os
import subprocess
import sys
import time

import pytest

from nodebed.exception import CorruptStateError
from nodebed.process import is_alive, pid_exists, wait_for_exit, write_pid
from nodebed.process.pidfile import pid_file_path


def _exited_child() -> int:
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    proc.wait()
    return proc.pid


def test_no_pid_file_is_not_alive(tmp_path):
    assert is_alive(tmp_path) is False


def test_own_process_is_alive(tmp_path):
    write_pid(tmp_path, os.getpid())

    assert is_alive(tmp_path) is True


def test_dead_process_is_not_alive(tmp_path):
    write_pid(tmp_path, _exited_child())

    assert is_alive(tmp_path) is False


def test_corrupt_pid_file_raises(tmp_path):
    pid_file_path(tmp_path).write_text("not-a-pid")

    with pytest.raises(CorruptStateError):
        is_alive(tmp_path)


def test_liveness_check_does_not_disturb_process():
    proc = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    try:
        for _ in range(5):
            assert pid_exists(proc.pid) is True
        assert proc.poll() is None
    finally:
        proc.kill()
        proc.wait()


def test_exited_child_is_reaped_and_reported_gone():
    # Not waited on, so it lingers as a zombie until checked
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    deadline = time.monotonic() + 10
    while pid_exists(proc.pid):
        assert time.monotonic() < deadline
        time.sleep(0.01)

    assert pid_exists(proc.pid) is False


def test_permission_error_counts_as_alive(monkeypatch):
    def deny(pid, sig):
        raise PermissionError(1, "Operation not permitted")

    monkeypatch.setattr(os, "kill", deny)

    assert pid_exists(1) is True


def test_wait_for_exit_times_out_on_live_process():
    start = time.monotonic()

    assert wait_for_exit(os.getpid(), 0.05, poll_interval=0.01) is False
    assert time.monotonic() - start >= 0.05


def test_wait_for_exit_returns_when_gone():
    assert wait_for_exit(_exited_child(), 1.0) is True
