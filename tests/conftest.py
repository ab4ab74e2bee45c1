"""Shared fixtures: a fake daemon executable and fast settings"""

import os
import signal
import stat
import sys
from pathlib import Path

import pytest

from nodebed.config import Settings
from nodebed.process import read_pid
from nodebed.process.liveness import pid_exists

FAKE_DAEMON = '''#!{python}
"""Stand-in for ipfs / go-filecoin used by the test suite"""
import hashlib
import json
import os
import signal
import sys
import time
from pathlib import Path


def data_dir():
    return Path(os.environ.get("IPFS_PATH") or os.environ["FIL_PATH"])


def peer_id(directory):
    return "Qm" + hashlib.sha256(str(directory).encode()).hexdigest()[:44]


def daemon(directory, args):
    (directory / "daemon.args").write_text(json.dumps({{
        "args": args,
        "cwd": os.getcwd(),
        "env": {{k: os.environ.get(k, "") for k in ("IPFS_PATH", "FIL_PATH", "FIL_API")}},
    }}))

    def stop(signum, frame):
        (directory / "ready").unlink(missing_ok=True)
        sys.exit(0)

    if "--ignore-signals" in args:
        signal.signal(signal.SIGINT, signal.SIG_IGN)
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    else:
        signal.signal(signal.SIGINT, stop)
        signal.signal(signal.SIGTERM, stop)

    print("daemon started", flush=True)
    print("daemon log line", file=sys.stderr, flush=True)
    if "--never-ready" not in args:
        (directory / "api").write_text("/ip4/127.0.0.1/tcp/5001")
        (directory / "ready").write_text(peer_id(directory))
    while True:
        time.sleep(0.05)


def main(argv):
    directory = data_dir()
    command = argv[0] if argv else ""
    if command == "init":
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "config").write_text(json.dumps({{
            "Identity": {{"PeerID": peer_id(directory)}},
            "Addresses": {{"API": "/ip4/127.0.0.1/tcp/5001"}},
        }}))
        print("initialized", argv[1:])
        return 0
    if command == "daemon":
        daemon(directory, argv[1:])
    if command == "id":
        ready = directory / "ready"
        if not ready.exists():
            print("Error: api not running", file=sys.stderr)
            return 1
        print(ready.read_text())
        return 0
    if command == "stats":
        print(json.dumps({{"TotalIn": 1024, "TotalOut": 2048, "RateIn": 1.5, "RateOut": 2.5}}))
        return 0
    print("unknown command", command, file=sys.stderr)
    return 2


sys.exit(main(sys.argv[1:]))
'''


@pytest.fixture
def fake_daemon(tmp_path: Path) -> Path:
    """Executable that behaves like a minimal ipfs/go-filecoin binary"""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    binary = bin_dir / "fake-daemon"
    binary.write_text(FAKE_DAEMON.format(python=sys.executable))
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return binary


@pytest.fixture
def settings(tmp_path: Path, fake_daemon: Path) -> Settings:
    return Settings(
        testbed_path=tmp_path / "testbed",
        ipfs_binary=str(fake_daemon),
        filecoin_binary=str(fake_daemon),
        interrupt_timeout=0.5,
        quit_timeout=0.5,
        kill_timeout=10.0,
        readiness_settle_delay=0.05,
        readiness_attempts=30,
        readiness_interval=0.1,
    )


@pytest.fixture(autouse=True)
def kill_leftover_daemons(tmp_path: Path):
    """Make sure no daemon started by a test outlives it"""
    yield
    for pid_file in tmp_path.rglob("daemon.pid"):
        try:
            pid = read_pid(pid_file.parent)
        except Exception:
            continue
        if pid and pid != os.getpid() and pid_exists(pid):
            os.kill(pid, signal.SIGKILL)
