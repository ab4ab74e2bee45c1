"""Persisted set of nodes making up a testbed

Layout of a testbed root:

    <root>/nodespec.json    list of NodeSpec records
    <root>/<i>/             data directory of node i
"""
import json
import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from .config import Settings
from .enum import NodeType
from .exception import ConfigError, NodeNotFoundError, TestbedNotInitializedError
from .node import DEFAULT_API_PORT, TestbedNode, create_node
from .node.filecoin import FilecoinNode

logger = logging.getLogger(__name__)

NODESPEC_FILE_NAME = "nodespec.json"


class NodeSpec(BaseModel):
    type: NodeType
    dir: str
    peer_id: str = ""
    api_port: Optional[int] = None


class NodeRegistry:
    """Loads and saves the nodes of one testbed root"""

    def __init__(self, root: Path | str, settings: Settings | None = None):
        self.root = Path(root)
        self.settings = settings or Settings(testbed_path=self.root)

    @property
    def spec_file(self) -> Path:
        return self.root / NODESPEC_FILE_NAME

    def exists(self) -> bool:
        return self.spec_file.exists()

    def load_specs(self) -> List[NodeSpec]:
        if not self.spec_file.exists():
            raise TestbedNotInitializedError(
                f"No testbed at {self.root}, run: nodebed init"
            )
        try:
            raw = json.loads(self.spec_file.read_text())
            return [NodeSpec.model_validate(item) for item in raw]
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid node spec file {self.spec_file}: {e}")

    def load_all(self) -> List[TestbedNode]:
        """Load every node of the testbed, in index order"""
        return [self._build(spec) for spec in self.load_specs()]

    def load(self, index: int) -> TestbedNode:
        specs = self.load_specs()
        if index < 0 or index >= len(specs):
            raise NodeNotFoundError(
                f"Node {index} does not exist, testbed has {len(specs)} nodes"
            )
        return self._build(specs[index])

    def save(self, nodes: Sequence[TestbedNode]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        specs = [self._spec(node) for node in nodes]
        self.spec_file.write_text(
            json.dumps([spec.model_dump(mode="json") for spec in specs], indent=2)
        )
        logger.debug(f"Saved {len(specs)} node specs to {self.spec_file}")

    def update(self, index: int, node: TestbedNode) -> None:
        """Persist the current state (e.g. a new peer id) of one node"""
        specs = self.load_specs()
        if index < 0 or index >= len(specs):
            raise NodeNotFoundError(f"Node {index} does not exist")
        specs[index] = self._spec(node)
        self.spec_file.write_text(
            json.dumps([spec.model_dump(mode="json") for spec in specs], indent=2)
        )

    def create(
        self,
        count: int,
        node_type: NodeType | str = NodeType.IPFS,
        base_port: int = DEFAULT_API_PORT,
        force: bool = False,
    ) -> List[TestbedNode]:
        """Allocate ``count`` node directories and write the spec file

        Args:
            count: Number of nodes
            node_type: Daemon flavor for all nodes
            base_port: API port of node 0, node i gets base_port + i
            force: Replace an existing testbed

        Raises:
            ConfigError: Testbed exists and ``force`` is off, or bad count
        """
        if count <= 0:
            raise ConfigError(f"Node count must be positive, got {count}")
        if self.exists():
            if not force:
                raise ConfigError(
                    f"Testbed already exists at {self.root}, use --force to replace it"
                )
            for node in self.load_all():
                if node.is_alive():
                    raise ConfigError(
                        f"Node {node.directory} is still running, kill it before replacing the testbed"
                    )
            for spec in self.load_specs():
                shutil.rmtree(spec.dir, ignore_errors=True)
            self.spec_file.unlink()

        nodes = []
        for i in range(count):
            directory = self.root / str(i)
            directory.mkdir(parents=True, exist_ok=True)
            nodes.append(create_node(
                node_type,
                directory,
                api_port=base_port + i,
                settings=self.settings,
            ))
        self.save(nodes)
        logger.info(f"Created testbed with {count} {NodeType(node_type).value} nodes at {self.root}")
        return nodes

    def _build(self, spec: NodeSpec) -> TestbedNode:
        return create_node(
            spec.type,
            spec.dir,
            peer_id=spec.peer_id,
            api_port=spec.api_port,
            settings=self.settings,
        )

    @staticmethod
    def _spec(node: TestbedNode) -> NodeSpec:
        return NodeSpec(
            type=node.node_type,
            dir=str(node.directory),
            peer_id=node.peer_id,
            api_port=node.api_port if isinstance(node, FilecoinNode) else None,
        )
