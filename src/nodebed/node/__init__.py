"""Testbed node types"""
from pathlib import Path

from ..config import Settings
from ..enum import NodeType
from ..exception import ConfigError
from .base import TestbedNode
from .filecoin import FilecoinNode
from .ipfs import IpfsNode

DEFAULT_API_PORT = 5001


def create_node(
    node_type: NodeType | str,
    directory: Path | str,
    *,
    peer_id: str = "",
    api_port: int | None = None,
    settings: Settings | None = None,
) -> TestbedNode:
    """Build the node variant for ``node_type``

    Raises:
        ConfigError: Unknown node type
    """
    try:
        node_type = NodeType(node_type)
    except ValueError:
        raise ConfigError(
            f"Unknown node type: {node_type}. "
            f"Available types: {[t.value for t in NodeType]}"
        )

    if node_type is NodeType.FILECOIN:
        return FilecoinNode(
            directory,
            api_port=api_port if api_port is not None else DEFAULT_API_PORT,
            peer_id=peer_id,
            settings=settings,
        )
    return IpfsNode(directory, peer_id=peer_id, settings=settings)


__all__ = ["TestbedNode", "IpfsNode", "FilecoinNode", "create_node", "DEFAULT_API_PORT"]
