"""Custom exceptions for nodebed"""


class NodebedException(Exception):
    """Base exception for all nodebed errors

    All custom exceptions should inherit from this class.
    The CLI catches this and prints the message instead of a traceback.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
    """

    def __init__(self, message: str, code: str):
        """Initialize nodebed exception

        Args:
            message: Human-readable error message
            code: Error code (e.g., "ALREADY_RUNNING", "SIGNAL_FAILED")
        """
        self.message = message
        self.code = code
        super().__init__(message)


# ==================== Process Layer Exceptions ====================


class AlreadyRunningError(NodebedException):
    """Node already has a live process

    Examples:
        - Starting a node whose daemon.pid points at a live process
    """

    def __init__(self, message: str, pid: int | None = None):
        super().__init__(message, "ALREADY_RUNNING")
        self.pid = pid


class LaunchFailedError(NodebedException):
    """The daemon binary could not be executed

    Examples:
        - Binary not found in PATH
        - Permission denied on the binary
    """

    def __init__(self, message: str):
        super().__init__(message, "LAUNCH_FAILED")


class PersistFailedError(NodebedException):
    """The PID of a launched process could not be written

    The process may still be running. ``pid`` holds the orphan so the
    caller can deal with it.
    """

    def __init__(self, message: str, pid: int | None = None):
        super().__init__(message, "PERSIST_FAILED")
        self.pid = pid


class CorruptStateError(NodebedException):
    """PID file exists but does not contain a valid process id"""

    def __init__(self, message: str):
        super().__init__(message, "CORRUPT_STATE")


class SignalFailedError(NodebedException):
    """A termination signal could not be delivered

    Examples:
        - Process vanished between two escalation stages
        - Process belongs to another user
    """

    def __init__(self, message: str):
        super().__init__(message, "SIGNAL_FAILED")


class PidFileRemovalError(NodebedException):
    """PID file of a stopped process could not be deleted

    The on-disk state no longer matches reality; callers must not carry on.
    """

    def __init__(self, message: str):
        super().__init__(message, "PID_FILE_REMOVAL_FAILED")


class KillTimeoutError(NodebedException):
    """Process survived SIGKILL for longer than the configured bound"""

    def __init__(self, message: str):
        super().__init__(message, "KILL_TIMEOUT")


class NodeNotRunningError(NodebedException):
    """Operation needs a running node but there is no PID file"""

    def __init__(self, message: str):
        super().__init__(message, "NODE_NOT_RUNNING")


class ReadinessTimeoutError(NodebedException):
    """Node never answered an identity query"""

    def __init__(self, message: str):
        super().__init__(message, "READINESS_TIMEOUT")


class CommandFailedError(NodebedException):
    """A command run in a node's environment exited non-zero"""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        super().__init__(message, "COMMAND_FAILED")
        self.stdout = stdout
        self.stderr = stderr


# ==================== Node Layer Exceptions ====================


class PeerIdentityMissingError(NodebedException):
    """A node in the testbed has no known peer identity"""

    def __init__(self, message: str):
        super().__init__(message, "PEER_IDENTITY_MISSING")


class UnknownAttributeError(NodebedException):
    """Attribute name not recognized by the node type"""

    def __init__(self, message: str):
        super().__init__(message, "UNKNOWN_ATTRIBUTE")


class NotSupportedError(NodebedException):
    """Operation is not available for this node type"""

    def __init__(self, message: str):
        super().__init__(message, "NOT_SUPPORTED")


class InvalidAddressError(NodebedException):
    """Multiaddr cannot be turned into a dial address"""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_ADDRESS")


# ==================== Testbed Layer Exceptions ====================


class NodeNotFoundError(NodebedException):
    """Node index does not exist in the testbed"""

    def __init__(self, message: str):
        super().__init__(message, "NODE_NOT_FOUND")


class TestbedNotInitializedError(NodebedException):
    """Testbed directory has no node spec file

    Examples:
        - Running ``nodebed start`` before ``nodebed init``
    """

    __test__ = False

    def __init__(self, message: str):
        super().__init__(message, "TESTBED_NOT_INITIALIZED")


class ConfigError(NodebedException):
    """Invalid testbed or node configuration"""

    def __init__(self, message: str):
        super().__init__(message, "CONFIG_ERROR")
