"""Tests for the command line interface"""

import json
import logging

import click
import pytest
from click.testing import CliRunner

from nodebed.cli.main import main
from nodebed.cli.util import parse_node_range, split_selector
from nodebed.process import is_alive, read_pid, write_pid


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def testbed(tmp_path):
    return tmp_path / "testbed"


@pytest.fixture
def invoke(testbed, fake_daemon):
    runner = CliRunner()
    env = {
        "NODEBED_IPFS_BINARY": str(fake_daemon),
        "NODEBED_FILECOIN_BINARY": str(fake_daemon),
        "NODEBED_INTERRUPT_TIMEOUT": "0.5",
        "NODEBED_QUIT_TIMEOUT": "0.5",
        "NODEBED_KILL_TIMEOUT": "10",
        "NODEBED_READINESS_SETTLE_DELAY": "0.05",
        "NODEBED_READINESS_ATTEMPTS": "30",
        "NODEBED_LOG_LEVEL": "WARNING",
    }

    def _invoke(*args):
        return runner.invoke(main, ["--path", str(testbed), *args], env=env)

    return _invoke


def _specs(testbed):
    return json.loads((testbed / "nodespec.json").read_text())


@pytest.mark.parametrize(
    "selector, expected",
    [
        ("all", [0, 1, 2, 3, 4]),
        ("3", [3]),
        ("0-2", [0, 1, 2]),
        ("[0,2,3-4]", [0, 2, 3, 4]),
        ("4,1,1", [1, 4]),
    ],
)
def test_parse_node_range(selector, expected):
    assert parse_node_range(selector, 5) == expected


@pytest.mark.parametrize("selector", ["5", "a", "3-1", "1-", ""])
def test_parse_node_range_rejects(selector):
    with pytest.raises(click.BadParameter):
        parse_node_range(selector, 5)


@pytest.mark.parametrize(
    "nodes, args, expected",
    [
        ("all", (), ("all", ())),
        ("0-2", ("--offline",), ("0-2", ("--offline",))),
        ("[1,3]", (), ("[1,3]", ())),
        ("--offline", (), ("all", ("--offline",))),
        ("--offline", ("--debug",), ("all", ("--offline", "--debug"))),
    ],
)
def test_split_selector(nodes, args, expected):
    assert split_selector(nodes, args) == expected


def test_init_creates_testbed(invoke, testbed):
    result = invoke("init", "-n", "2")

    assert result.exit_code == 0, result.output
    specs = _specs(testbed)
    assert [s["dir"] for s in specs] == [str(testbed / "0"), str(testbed / "1")]
    assert all(s["peer_id"].startswith("Qm") for s in specs)
    assert (testbed / "0" / "config").exists()
    assert (testbed / "logs").is_dir()


def test_init_twice_needs_force(invoke):
    assert invoke("init", "-n", "1").exit_code == 0

    result = invoke("init", "-n", "1")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_start_status_kill_cycle(invoke, testbed):
    assert invoke("init", "-n", "2").exit_code == 0

    result = invoke("start", "all")
    assert result.exit_code == 0, result.output
    assert is_alive(testbed / "0") and is_alive(testbed / "1")

    result = invoke("status")
    assert result.exit_code == 0, result.output
    assert "yes" in result.output

    result = invoke("get", "path", "1")
    assert result.output.strip() == str(testbed / "1")

    result = invoke("kill", "0-1")
    assert result.exit_code == 0, result.output
    assert not is_alive(testbed / "0") and not is_alive(testbed / "1")
    assert read_pid(testbed / "0") is None


def test_start_skips_running_node(invoke, testbed):
    assert invoke("init", "-n", "1").exit_code == 0
    assert invoke("start", "0").exit_code == 0
    pid = read_pid(testbed / "0")
    try:
        result = invoke("start", "0")

        assert result.exit_code == 0
        assert "already running" in result.output
        assert read_pid(testbed / "0") == pid
    finally:
        invoke("kill")


def test_start_passes_daemon_args(invoke, testbed):
    assert invoke("init", "-n", "1").exit_code == 0
    try:
        result = invoke("start", "0", "--", "--offline")

        assert result.exit_code == 0, result.output
        recorded = json.loads((testbed / "0" / "daemon.args").read_text())
        assert recorded["args"] == ["--offline"]
    finally:
        invoke("kill")


def test_start_all_with_daemon_args_only(invoke, testbed):
    assert invoke("init", "-n", "2").exit_code == 0
    try:
        result = invoke("start", "--", "--offline")

        assert result.exit_code == 0, result.output
        for i in range(2):
            recorded = json.loads((testbed / str(i) / "daemon.args").read_text())
            assert recorded["args"] == ["--offline"]
    finally:
        invoke("kill")


def test_filecoin_start_records_peer_id(invoke, testbed):
    assert invoke("init", "-n", "1", "--type", "filecoin", "--base-port", "3453").exit_code == 0
    assert _specs(testbed)[0]["peer_id"] == ""
    try:
        assert invoke("start").exit_code == 0

        spec = _specs(testbed)[0]
        assert spec["peer_id"].startswith("Qm")
        assert spec["api_port"] == 3453
    finally:
        invoke("kill")


def test_restart(invoke, testbed):
    assert invoke("init", "-n", "1").exit_code == 0
    assert invoke("start").exit_code == 0
    first = read_pid(testbed / "0")
    try:
        result = invoke("restart", "0")

        assert result.exit_code == 0, result.output
        assert is_alive(testbed / "0")
        assert read_pid(testbed / "0") != first
    finally:
        invoke("kill")


def test_restart_all_with_daemon_args_only(invoke, testbed):
    assert invoke("init", "-n", "1").exit_code == 0
    assert invoke("start").exit_code == 0
    try:
        result = invoke("restart", "--", "--offline")

        assert result.exit_code == 0, result.output
        recorded = json.loads((testbed / "0" / "daemon.args").read_text())
        assert recorded["args"] == ["--offline"]
    finally:
        invoke("kill")


def test_kill_not_running_node(invoke):
    assert invoke("init", "-n", "1").exit_code == 0

    result = invoke("kill", "0")

    assert result.exit_code == 0
    assert "not running" in result.output


def test_kill_removes_stale_pid_file(invoke, testbed):
    assert invoke("init", "-n", "1").exit_code == 0
    write_pid(testbed / "0", 2 ** 22 + 12345)

    result = invoke("kill", "0")

    assert result.exit_code == 0
    assert read_pid(testbed / "0") is None


def test_commands_require_testbed(invoke):
    result = invoke("start")

    assert result.exit_code == 1
    assert "nodebed init" in result.output


def test_get_unknown_attribute(invoke):
    assert invoke("init", "-n", "1").exit_code == 0

    result = invoke("get", "color", "0")

    assert result.exit_code == 1
    assert "unrecognized attribute" in result.output


def test_run_command_in_node_environment(invoke, testbed, fake_daemon):
    assert invoke("init", "-n", "1").exit_code == 0

    result = invoke("run", "0", "--", str(fake_daemon), "stats", "bw")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["TotalIn"] == 1024
