"""Escalating daemon shutdown

A daemon is stopped by walking through increasingly forceful signals:

    SIGINT  -> wait interrupt_timeout
    SIGINT  -> wait interrupt_timeout
    SIGQUIT -> wait quit_timeout
    SIGKILL -> wait kill_timeout (None: until gone)

The second SIGINT covers a first one that was lost before the process had
its handlers installed. Running out of patience in one stage only moves to
the next; the only failures are signal delivery errors and an exceeded
``kill_timeout``.
"""
import logging
import os
from pathlib import Path

from ..enum import ShutdownStage
from ..exception import KillTimeoutError, NodeNotRunningError, SignalFailedError
from .liveness import wait_for_exit
from .pidfile import read_pid, remove_pid

logger = logging.getLogger(__name__)


def _send(pid: int, stage: ShutdownStage, directory: Path) -> None:
    try:
        os.kill(pid, stage.signum)
    except OSError as e:
        logger.error(
            f"Failed to send {stage.signum.name} to pid {pid} ({directory}): {e}"
        )
        raise SignalFailedError(f"Error killing daemon {directory}: {e}")


def kill_process(
    directory: Path | str,
    *,
    interrupt_timeout: float = 1.0,
    quit_timeout: float = 5.0,
    kill_timeout: float | None = None,
    poll_interval: float = 0.01,
) -> None:
    """Stop the daemon recorded in a node directory

    The pid is read from disk on every call, never cached, so a separate
    harness invocation can stop a daemon it did not start.

    Args:
        directory: Node directory
        interrupt_timeout: Wait after each SIGINT
        quit_timeout: Wait after SIGQUIT
        kill_timeout: Wait after SIGKILL, None waits until the process is gone
        poll_interval: Seconds between liveness checks

    Raises:
        NodeNotRunningError: No pid file, nothing was signalled
        CorruptStateError: Pid file is unreadable
        SignalFailedError: A signal could not be delivered
        KillTimeoutError: Process outlived ``kill_timeout`` after SIGKILL
        PidFileRemovalError: Process is gone but daemon.pid could not be deleted
    """
    directory = Path(directory)
    pid = read_pid(directory)
    if pid is None:
        raise NodeNotRunningError(
            f"Error killing daemon {directory}: no pid file"
        )

    stages = [
        (ShutdownStage.INTERRUPT_1, interrupt_timeout),
        (ShutdownStage.INTERRUPT_2, interrupt_timeout),
        (ShutdownStage.QUIT, quit_timeout),
        (ShutdownStage.KILL, kill_timeout),
    ]

    for stage, timeout in stages:
        logger.debug(
            f"Stopping daemon {directory}: stage={stage.value}, pid={pid}"
        )
        _send(pid, stage, directory)
        if wait_for_exit(pid, timeout, poll_interval):
            logger.info(f"Stopped daemon {directory}, pid = {pid} ({stage.value})")
            remove_pid(directory)
            return
        if stage is not ShutdownStage.KILL:
            logger.warning(
                f"Daemon {directory} (pid {pid}) still alive after "
                f"{stage.value}, escalating"
            )

    raise KillTimeoutError(
        f"Daemon {directory} (pid {pid}) still alive {kill_timeout}s after SIGKILL"
    )
