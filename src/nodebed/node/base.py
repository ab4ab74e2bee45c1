"""Base class for testbed node types"""
import logging
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..config import Settings
from ..enum import NodeAttr, NodeType
from ..exception import (
    CommandFailedError,
    NotSupportedError,
    PeerIdentityMissingError,
    UnknownAttributeError,
)
from ..process import daemon_environment, derive_environment, is_alive, kill_process, read_pid
from ..process.launcher import STDERR_FILE_NAME, STDOUT_FILE_NAME, start_process
from ..readiness import wait_until_ready

logger = logging.getLogger(__name__)


class TestbedNode(ABC):
    """
    Base class for all node types.

    A node is a data directory plus the daemon process running in it.
    Process state lives on disk (daemon.pid), so a node object can be
    rebuilt by another invocation and still control the same daemon.

    Subclasses must implement:
    - init(): Bootstrap on-disk state
    - start(): Launch the daemon and wait for readiness
    - query_identity(): Ask the running daemon for its peer id
    - api_addr(): Dial address of the control API
    - environment(): Environment for the daemon and helper commands
    """

    __test__ = False

    node_type: NodeType
    data_dir_var: str

    def __init__(
        self,
        directory: Path | str,
        peer_id: str = "",
        settings: Settings | None = None,
    ):
        """
        Initialize node.

        Args:
            directory: Node data directory, unique per node
            peer_id: Known peer id, empty until the daemon reports one
            settings: Testbed settings, defaults are used when omitted

        Note:
            Does NOT touch the filesystem. Call init() to bootstrap.
        """
        self.directory = Path(directory)
        self.peer_id = peer_id
        self.settings = settings or Settings()

    def __str__(self) -> str:
        return self.peer_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(directory={str(self.directory)!r}, peer_id={self.peer_id!r})"

    # ========== Lifecycle ==========

    @abstractmethod
    def init(self) -> None:
        """Bootstrap the node's on-disk state"""

    @abstractmethod
    def start(self, args: Sequence[str] = ()) -> None:
        """Launch the daemon and block until it is ready"""

    def kill(self) -> None:
        """Stop the daemon with signal escalation

        Raises:
            NodeNotRunningError: No pid file
            SignalFailedError: A signal could not be delivered
        """
        kill_process(
            self.directory,
            interrupt_timeout=self.settings.interrupt_timeout,
            quit_timeout=self.settings.quit_timeout,
            kill_timeout=self.settings.kill_timeout,
            poll_interval=self.settings.poll_interval,
        )

    def is_alive(self) -> bool:
        return is_alive(self.directory)

    def pid(self) -> int | None:
        return read_pid(self.directory)

    def _launch(self, args: Sequence[str]) -> int:
        return start_process(
            self.bin_name,
            "daemon",
            list(args),
            self.directory,
            self.environment(),
        )

    def _wait_until_ready(self) -> str:
        """Wait for the daemon and record the identity it reports

        The peer id is cleared first, so a node that never answers is
        left without one even if an earlier run or init had set it.
        """
        self.peer_id = ""
        return wait_until_ready(
            self,
            settle_delay=self.settings.readiness_settle_delay,
            attempts=self.settings.readiness_attempts,
            interval=self.settings.readiness_interval,
            strict=self.settings.readiness_strict,
        )

    # ========== Commands ==========

    @property
    @abstractmethod
    def bin_name(self) -> str:
        """Daemon executable used for this node"""

    @abstractmethod
    def environment(self) -> dict[str, str]:
        """Environment for the daemon and commands run against it"""

    @abstractmethod
    def query_identity(self) -> str:
        """Ask the running daemon for its peer id"""

    @abstractmethod
    def api_addr(self) -> str:
        """Control API dial address as host:port"""

    def run_command(self, *args: str) -> str:
        """Run a command with the node's environment

        Returns:
            Captured stdout

        Raises:
            CommandFailedError: Non-zero exit or the command could not run
        """
        try:
            result = subprocess.run(
                list(args),
                env=self.environment(),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise CommandFailedError(f"{' '.join(args)}: {e}")

        if result.returncode != 0:
            raise CommandFailedError(
                f"{' '.join(args)}: exit status {result.returncode}: "
                f"{result.stdout.strip()} {result.stderr.strip()}".rstrip(),
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result.stdout

    # ========== Attributes & config ==========

    def get_attr(self, name: str) -> str:
        """Read a node attribute

        Raises:
            UnknownAttributeError: Attribute not supported by this node type
        """
        if name == NodeAttr.ID:
            return self.peer_id
        if name == NodeAttr.PATH:
            return str(self.directory)
        raise UnknownAttributeError(f"unrecognized attribute: {name}")

    def set_attr(self, name: str, value: str) -> None:
        raise UnknownAttributeError(f"no attributes to set (got {name}={value!r})")

    def get_config(self) -> dict[str, Any]:
        raise NotSupportedError(f"{self.node_type.value} nodes have no readable config")

    def write_config(self, config: Mapping[str, Any]) -> None:
        raise NotSupportedError(f"{self.node_type.value} nodes have no writable config")

    # ========== Logs ==========

    @property
    def stdout_path(self) -> Path:
        return self.directory / STDOUT_FILE_NAME

    @property
    def stderr_path(self) -> Path:
        return self.directory / STDERR_FILE_NAME

    def read_stdout(self) -> str:
        return self.stdout_path.read_text(errors="replace")

    def read_stderr(self) -> str:
        return self.stderr_path.read_text(errors="replace")

    # ========== Interactive shell ==========

    def shell_environment(
        self,
        nodes: Sequence["TestbedNode"],
        base: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Environment for an interactive shell on this node

        Sets the data directory variable to this node and one
        ``NODE<i>`` variable per testbed node holding its peer id.

        Raises:
            PeerIdentityMissingError: Some node has no peer id yet
        """
        overrides = {self.data_dir_var: str(self.directory)}
        for i, node in enumerate(nodes):
            if not node.peer_id:
                raise PeerIdentityMissingError(
                    f"failed to check peer id of node {i} ({node.directory})"
                )
            overrides[f"NODE{i}"] = node.peer_id
        return derive_environment(os.environ if base is None else base, overrides)

    def shell(self, nodes: Sequence["TestbedNode"]) -> None:
        """Replace the current process with $SHELL set up for this node"""
        shell = os.environ.get("SHELL")
        if not shell:
            raise NotSupportedError("couldn't find shell, $SHELL is not set")

        env = self.shell_environment(nodes)
        logger.debug(f"Executing {shell} for node {self.directory}")
        os.execve(shell, [shell], env)

    def _daemon_environment(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        return daemon_environment(self.data_dir_var, self.directory, extra)
