"""
Data models for the key-value store.
"""

from logkv.models.exceptions import (
    FileError,
    KeyNotIndexedError,
    PositionError,
    ProcessRecordError,
    StoreError,
    WriteError,
)
from logkv.models.index import Index
from logkv.models.log import Log
from logkv.models.record import KeyValueRecord

__all__ = [
    "FileError",
    "Index",
    "KeyNotIndexedError",
    "KeyValueRecord",
    "Log",
    "PositionError",
    "ProcessRecordError",
    "StoreError",
    "WriteError",
]
