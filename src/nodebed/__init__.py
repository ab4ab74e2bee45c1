"""nodebed - local testbed of peer-to-peer daemons"""

from .config import Settings, get_settings
from .enum import NodeType
from .node import FilecoinNode, IpfsNode, TestbedNode, create_node
from .process import derive_environment, is_alive, kill_process, start_process
from .readiness import wait_until_ready
from .registry import NodeRegistry

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "NodeType",
    "TestbedNode",
    "IpfsNode",
    "FilecoinNode",
    "create_node",
    "derive_environment",
    "is_alive",
    "kill_process",
    "start_process",
    "wait_until_ready",
    "NodeRegistry",
]
