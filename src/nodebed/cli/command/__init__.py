"""CLI command package"""

from .attr import get, set_
from .init import init
from .kill import kill
from .run import run
from .shell import shell
from .start import restart, start
from .status import status

__all__ = ["init", "start", "restart", "kill", "status", "get", "set_", "run", "shell"]
