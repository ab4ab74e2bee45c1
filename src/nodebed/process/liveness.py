"""Process liveness checks"""
import os
import time
from pathlib import Path

from .pidfile import read_pid


def _reap(pid: int) -> bool:
    """Reap ``pid`` if it is an exited child of this process

    Returns:
        True if the child had exited and was collected
    """
    try:
        reaped, _ = os.waitpid(pid, os.WNOHANG)
    except ChildProcessError:
        # Not our child, or already collected
        return False
    return reaped == pid


def pid_exists(pid: int) -> bool:
    """Check whether a process exists without disturbing it

    Signal 0 performs the existence and permission checks only. A process
    we are not allowed to signal still exists.
    """
    if _reap(pid):
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def is_alive(directory: Path | str) -> bool:
    """Check whether the process recorded for a node directory is alive

    Args:
        directory: Node directory

    Returns:
        False when there is no PID file or the process is gone

    Raises:
        CorruptStateError: PID file is unreadable
    """
    pid = read_pid(directory)
    if pid is None:
        return False
    return pid_exists(pid)


def wait_for_exit(
    pid: int,
    timeout: float | None,
    poll_interval: float = 0.01,
) -> bool:
    """Poll until ``pid`` is gone

    Args:
        pid: Process to watch
        timeout: Seconds to wait, None waits forever
        poll_interval: Seconds between checks

    Returns:
        True if the process exited, False on timeout
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    while pid_exists(pid):
        if deadline is not None and time.monotonic() >= deadline:
            return False
        time.sleep(poll_interval)
    return True
