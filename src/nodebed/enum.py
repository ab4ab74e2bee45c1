"""Enumeration types for nodebed"""
import signal
from enum import Enum


class NodeType(str, Enum):
    """Node type enumeration

    Each value selects one daemon flavor with its own binary, argument
    and readiness conventions.
    """
    IPFS = "ipfs"
    FILECOIN = "filecoin"


class NodeAttr(str, Enum):
    """Attribute names readable through ``get_attr``"""
    ID = "id"
    PATH = "path"
    BW_IN = "bw_in"
    BW_OUT = "bw_out"
    API_PORT = "api_port"


class ShutdownStage(str, Enum):
    """Escalation stages used to stop a daemon, in order"""
    INTERRUPT_1 = "interrupt-1"
    INTERRUPT_2 = "interrupt-2"
    QUIT = "quit"
    KILL = "kill"

    @property
    def signum(self) -> signal.Signals:
        return _STAGE_SIGNALS[self]


_STAGE_SIGNALS = {
    ShutdownStage.INTERRUPT_1: signal.SIGINT,
    ShutdownStage.INTERRUPT_2: signal.SIGINT,
    ShutdownStage.QUIT: signal.SIGQUIT,
    ShutdownStage.KILL: signal.SIGKILL,
}
