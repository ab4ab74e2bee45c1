"""Daemon process launcher"""
import logging
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from ..exception import AlreadyRunningError, LaunchFailedError, PersistFailedError
from .liveness import is_alive
from .pidfile import read_pid, write_pid

logger = logging.getLogger(__name__)

STDOUT_FILE_NAME = "daemon.stdout"
STDERR_FILE_NAME = "daemon.stderr"


def _tail(path: Path, limit: int = 2048) -> str:
    try:
        return path.read_text(errors="replace")[-limit:].strip()
    except OSError:
        return ""


def start_process(
    binary: str,
    subcommand: str,
    args: Sequence[str],
    directory: Path | str,
    env: Mapping[str, str],
) -> int:
    """Launch a daemon for a node directory

    Business logic:
    1. Refuse to start if the directory already has a live process
    2. Run ``binary subcommand *args`` in the node directory with the
       given environment, stdout/stderr appended to daemon.stdout and
       daemon.stderr
    3. Record the child's pid in daemon.pid

    Returns once the process is forked, not once it is ready.

    Args:
        binary: Daemon executable, name in PATH or absolute path
        subcommand: First argument (e.g. "daemon")
        args: Remaining arguments
        directory: Node directory
        env: Environment for the child

    Returns:
        Pid of the launched process

    Raises:
        AlreadyRunningError: A live process is recorded for the directory
        LaunchFailedError: The binary could not be executed
        PersistFailedError: The pid could not be written; the child is
            left running and its pid is attached to the error
    """
    directory = Path(directory)

    if is_alive(directory):
        pid = read_pid(directory)
        raise AlreadyRunningError(
            f"Node at {directory} is already running (pid {pid})", pid=pid
        )

    cmd = [binary, subcommand, *args]
    logger.debug(f"Starting daemon: {' '.join(cmd)} (cwd={directory})")

    stderr_path = directory / STDERR_FILE_NAME
    try:
        with open(directory / STDOUT_FILE_NAME, "ab") as stdout, \
                open(stderr_path, "ab") as stderr:
            process = subprocess.Popen(
                cmd,
                cwd=directory,
                env=dict(env),
                stdin=subprocess.DEVNULL,
                stdout=stdout,
                stderr=stderr,
                start_new_session=True,
            )
    except OSError as e:
        logger.error(f"Failed to launch {binary} for {directory}: {e}")
        message = f"Failed to launch {' '.join(cmd)}: {e}"
        captured = _tail(stderr_path)
        if captured:
            message = f"{message}: {captured}"
        raise LaunchFailedError(message)

    pid = process.pid
    logger.info(f"Started daemon {directory}, pid = {pid}")

    try:
        write_pid(directory, pid)
    except PersistFailedError:
        logger.error(
            f"Daemon for {directory} is running as pid {pid} "
            f"but its pid file could not be written"
        )
        raise

    return pid
