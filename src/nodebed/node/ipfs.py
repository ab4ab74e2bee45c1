"""IPFS node implementation"""
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..address import dial_address
from ..bandwidth import get_bandwidth
from ..enum import NodeAttr, NodeType
from ..exception import CommandFailedError, ConfigError, NotSupportedError
from .base import TestbedNode

logger = logging.getLogger(__name__)


class IpfsNode(TestbedNode):
    """
    go-ipfs style node.

    - init: ``ipfs init -b=<bits>`` with IPFS_PATH pointing at the node
    - start: ``ipfs daemon <args>``; the peer id is read from the JSON
      config written by init, then the node is polled with ``ipfs id``
    - api address: the ``api`` file the daemon writes on startup
    """

    node_type = NodeType.IPFS
    data_dir_var = "IPFS_PATH"

    @property
    def bin_name(self) -> str:
        return self.settings.ipfs_binary

    @property
    def config_path(self) -> Path:
        return self.directory / "config"

    def environment(self) -> dict[str, str]:
        return self._daemon_environment()

    def init(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        try:
            self.run_command(self.bin_name, "init", f"-b={self.settings.init_key_bits}")
        except CommandFailedError as e:
            logger.error(f"Failed to init ipfs node at {self.directory}: {e.message}")
            raise
        self.peer_id = self._config_peer_id()
        logger.info(f"Initialized ipfs node {self.directory}, peer id = {self.peer_id}")

    def start(self, args: Sequence[str] = ()) -> None:
        self._launch(args)
        # Make sure the node is up before starting the rest so
        # bootstrapping works properly
        self._wait_until_ready()

    def query_identity(self) -> str:
        return self.run_command(self.bin_name, "id", "-f", "<id>").strip()

    def api_addr(self) -> str:
        api_file = self.directory / "api"
        try:
            text = api_file.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read api file {api_file}: {e}")
        return dial_address(text)

    def get_attr(self, name: str) -> str:
        if name == NodeAttr.BW_IN:
            return str(get_bandwidth(self).total_in)
        if name == NodeAttr.BW_OUT:
            return str(get_bandwidth(self).total_out)
        return super().get_attr(name)

    def get_config(self) -> dict[str, Any]:
        try:
            return json.loads(self.config_path.read_text())
        except FileNotFoundError:
            raise ConfigError(f"Node {self.directory} is not initialized, no config file")
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {self.config_path}: {e}")

    def write_config(self, config: Mapping[str, Any]) -> None:
        if not isinstance(config, Mapping):
            raise NotSupportedError("ipfs config must be a mapping")
        try:
            self.config_path.write_text(json.dumps(config, indent=2))
        except OSError as e:
            raise ConfigError(f"Cannot write config {self.config_path}: {e}")

    def _config_peer_id(self) -> str:
        config = self.get_config()
        try:
            return config["Identity"]["PeerID"]
        except (KeyError, TypeError):
            raise ConfigError(f"Config {self.config_path} has no Identity.PeerID")
