"""OS process control for testbed daemons"""

from .env import derive_environment, daemon_environment
from .pidfile import PID_FILE_NAME, pid_file_path, read_pid, write_pid, remove_pid
from .liveness import pid_exists, is_alive, wait_for_exit
from .launcher import start_process
from .shutdown import kill_process

__all__ = [
    "derive_environment",
    "daemon_environment",
    "PID_FILE_NAME",
    "pid_file_path",
    "read_pid",
    "write_pid",
    "remove_pid",
    "pid_exists",
    "is_alive",
    "wait_for_exit",
    "start_process",
    "kill_process",
]
