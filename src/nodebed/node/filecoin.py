"""Filecoin node implementation"""
import logging
from pathlib import Path
from typing import Sequence

from ..enum import NodeAttr, NodeType
from ..config import Settings
from .base import TestbedNode

logger = logging.getLogger(__name__)

SWARM_LISTEN_ADDR = "/ip4/127.0.0.1/tcp/0"


class FilecoinNode(TestbedNode):
    """
    go-filecoin style node.

    The API port is chosen when the node is created and passed to the
    daemon on the command line, the peer id is only known once the
    daemon answers ``id``.
    """

    node_type = NodeType.FILECOIN
    data_dir_var = "FIL_PATH"

    def __init__(
        self,
        directory: Path | str,
        api_port: int,
        peer_id: str = "",
        settings: Settings | None = None,
    ):
        super().__init__(directory, peer_id=peer_id, settings=settings)
        self.api_port = api_port

    @property
    def bin_name(self) -> str:
        return self.settings.filecoin_binary

    def environment(self) -> dict[str, str]:
        return self._daemon_environment({"FIL_API": f":{self.api_port}"})

    def init(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initialized filecoin node {self.directory}")

    def start(self, args: Sequence[str] = ()) -> None:
        fixed = [
            f"--cmdapiaddr=:{self.api_port}",
            f"--swarmlisten={SWARM_LISTEN_ADDR}",
        ]
        self._launch([*fixed, *args])
        self._wait_until_ready()

    def query_identity(self) -> str:
        return self.run_command(self.bin_name, "id", "--format=<id>").strip()

    def api_addr(self) -> str:
        return f"127.0.0.1:{self.api_port}"

    def get_attr(self, name: str) -> str:
        if name == NodeAttr.API_PORT:
            return str(self.api_port)
        return super().get_attr(name)
