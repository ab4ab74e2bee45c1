"""Tests for PID file handling"""

import pytest

from nodebed.exception import CorruptStateError, PersistFailedError, PidFileRemovalError
from nodebed.process.pidfile import pid_file_path, read_pid, remove_pid, write_pid


def test_missing_pid_file_reads_as_none(tmp_path):
    assert read_pid(tmp_path) is None


def test_written_pid_reads_back(tmp_path):
    write_pid(tmp_path, 4242)

    assert pid_file_path(tmp_path).read_text() == "4242"
    assert read_pid(tmp_path) == 4242


def test_surrounding_whitespace_is_tolerated(tmp_path):
    pid_file_path(tmp_path).write_text(" 17\n")

    assert read_pid(tmp_path) == 17


@pytest.mark.parametrize("content", ["", "abc", "12abc", "0", "-5"])
def test_invalid_content_is_corrupt_state(tmp_path, content):
    pid_file_path(tmp_path).write_text(content)

    with pytest.raises(CorruptStateError):
        read_pid(tmp_path)


def test_write_failure_is_persist_failed(tmp_path):
    with pytest.raises(PersistFailedError) as exc_info:
        write_pid(tmp_path / "missing-dir", 99)

    assert exc_info.value.pid == 99
    assert exc_info.value.code == "PERSIST_FAILED"


def test_remove_missing_file_is_fine(tmp_path):
    remove_pid(tmp_path)

    assert not pid_file_path(tmp_path).exists()


def test_remove_existing_file(tmp_path):
    write_pid(tmp_path, 1)

    remove_pid(tmp_path)

    assert read_pid(tmp_path) is None


def test_remove_failure_is_fatal(tmp_path):
    # A directory in place of the pid file cannot be unlinked
    pid_file_path(tmp_path).mkdir()

    with pytest.raises(PidFileRemovalError):
        remove_pid(tmp_path)


def test_write_replaces_existing_pid_without_leftovers(tmp_path):
    write_pid(tmp_path, 1)
    write_pid(tmp_path, 2)

    assert read_pid(tmp_path) == 2
    assert [p.name for p in tmp_path.iterdir()] == ["daemon.pid"]


def test_failed_rename_leaves_old_pid_and_no_temp_file(tmp_path, monkeypatch):
    write_pid(tmp_path, 1)

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("nodebed.process.pidfile.os.replace", fail_replace)

    with pytest.raises(PersistFailedError) as exc_info:
        write_pid(tmp_path, 2)

    assert exc_info.value.pid == 2
    assert read_pid(tmp_path) == 1
    assert [p.name for p in tmp_path.iterdir()] == ["daemon.pid"]
