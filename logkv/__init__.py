"""
Log-structured key-value store.

This package provides a minimal append-only key-value store with:
- insert(key, value) - O(1) append to the log + index update
- get(key) - O(1) index lookup + one record read
- delete(key) - Tombstone-based deletion (empty value)
- open(path) - Index rebuilt by replaying the whole log
"""

from logkv.engine.store import Store
from logkv.models.exceptions import (
    FileError,
    KeyNotIndexedError,
    PositionError,
    ProcessRecordError,
    StoreError,
    WriteError,
)
from logkv.models.record import KeyValueRecord

__all__ = [
    "FileError",
    "KeyNotIndexedError",
    "KeyValueRecord",
    "PositionError",
    "ProcessRecordError",
    "Store",
    "StoreError",
    "WriteError",
]
