"""PID file handling

``daemon.pid`` inside a node directory is the only record of a running
daemon. It exists iff the node may be running.
"""
import logging
import os
import tempfile
from pathlib import Path

from ..exception import CorruptStateError, PersistFailedError, PidFileRemovalError

logger = logging.getLogger(__name__)

PID_FILE_NAME = "daemon.pid"


def pid_file_path(directory: Path | str) -> Path:
    return Path(directory) / PID_FILE_NAME


def read_pid(directory: Path | str) -> int | None:
    """Read the PID recorded for a node directory

    Args:
        directory: Node directory

    Returns:
        The PID, or None if there is no PID file

    Raises:
        CorruptStateError: File exists but does not hold a positive integer
    """
    pid_file = pid_file_path(directory)
    try:
        content = pid_file.read_text()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise CorruptStateError(f"Cannot read pid file {pid_file}: {e}")

    try:
        pid = int(content.strip())
    except ValueError:
        raise CorruptStateError(
            f"Pid file {pid_file} has invalid content: {content!r}"
        )
    if pid <= 0:
        raise CorruptStateError(f"Pid file {pid_file} has invalid pid: {pid}")
    return pid


def write_pid(directory: Path | str, pid: int) -> None:
    """Persist a PID for a node directory

    The PID goes to a temporary file in the same directory first and is
    then renamed over ``daemon.pid``, so readers never see a partial file.

    Raises:
        PersistFailedError: The file could not be written
    """
    pid_file = pid_file_path(directory)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=pid_file.parent, prefix=f".{PID_FILE_NAME}.")
        with os.fdopen(fd, "w") as f:
            f.write(str(pid))
        os.replace(tmp_name, pid_file)
    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise PersistFailedError(
            f"Failed to write pid file {pid_file} for pid {pid}: {e}", pid=pid
        )


def remove_pid(directory: Path | str) -> None:
    """Delete the PID file, a missing file is not an error

    Raises:
        PidFileRemovalError: The file exists and could not be deleted
    """
    pid_file = pid_file_path(directory)
    try:
        pid_file.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Failed to remove pid file {pid_file}: {e}")
        raise PidFileRemovalError(
            f"Error removing pid file for daemon at {directory}: {e}"
        )
