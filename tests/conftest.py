"""
Shared pytest fixtures for key-value store tests.
"""

import errno
import os
import tempfile

import pytest

from logkv.engine.store import Store
from logkv.models.log import Log


class FullDiskFile:
    """Wraps a log file handle so that every write fails with ENOSPC."""

    def __init__(self, wrapped):
        self._wrapped = wrapped

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")

    def __getattr__(self, name):
        return getattr(self._wrapped, name)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def log_path(temp_dir):
    """Provide a path for the log file."""
    return os.path.join(temp_dir, "store.log")


@pytest.fixture
def log(log_path):
    """Provide an open Log instance."""
    with Log(log_path) as opened:
        yield opened


@pytest.fixture
def store(log_path):
    """Provide an opened, empty Store instance."""
    with Store.open(log_path) as opened:
        yield opened


@pytest.fixture
def two_record_log():
    """Raw bytes of a log holding {AA: BB} at offset 0 and {CC: DDEE} at offset 10."""
    return bytes(
        [
            0x01, 0, 0, 0, 0x01, 0, 0, 0, 0xAA, 0xBB,
            0x01, 0, 0, 0, 0x02, 0, 0, 0, 0xCC, 0xDD, 0xEE,
        ]
    )


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return [
        (b"key1", b"value1"),
        (b"key2", b"value2"),
        (b"key3", b"value3"),
    ]


@pytest.fixture
def fill_disk(monkeypatch):
    """Provide a function that makes every later append to a Log fail."""

    def _fill(log: Log) -> None:
        monkeypatch.setattr(log, "_file", FullDiskFile(log._file))

    return _fill
