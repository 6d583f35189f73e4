"""
Store - Main key-value store API.
"""

import logging
import os
from collections.abc import Iterator

from logkv.engine.loader import IndexLoader
from logkv.interfaces.key_value_store import KeyValueStore
from logkv.models.exceptions import KeyNotIndexedError, ProcessRecordError, WriteError
from logkv.models.index import Index
from logkv.models.log import Log
from logkv.models.record import CorruptRecord, DecodedRecord, decode, encode


class Store(KeyValueStore):
    """
    Log-structured key-value store.

    Provides:
    - open(path): Attach to a log file and rebuild the index
    - get(key): Retrieve the latest value for a key
    - insert(key, value): Insert/update a key-value pair
    - delete(key): Write a tombstone (empty value) for a key

    Architecture:
    - Every write is appended to a single log file; nothing is rewritten
    - An in-memory Index maps each key to the offset of its latest record
    - The Index is rebuilt from the log on every open
    - Deleted keys stay indexed and read back as an empty value

    The store owns its file handle exclusively and is not safe for use from
    more than one thread or process at a time.
    """

    def __init__(self, path: str, sync_writes: bool = False) -> None:
        """
        Create a store attached to a log file, with an empty index.

        Use Store.open() to also replay the log.

        Args:
            path: Path to the log file. Created if missing.
            sync_writes: fsync the log after every append.

        Raises:
            ValueError: If path is empty.
            FileError: If the log file cannot be created or opened.
        """
        if not path or not str(path).strip():
            raise ValueError("path cannot be empty")
        if not isinstance(sync_writes, bool):
            raise TypeError(f"sync_writes must be a bool, got {type(sync_writes).__name__}")

        self._path = os.path.abspath(path)
        self._log = Log(self._path, sync_writes=sync_writes)
        self._index = Index()
        self._loader = IndexLoader()

        self._log.open()

    @classmethod
    def open(cls, path: str, sync_writes: bool = False) -> "Store":
        """
        Open a store and rebuild its index from the log.

        Args:
            path: Path to the log file. Created if missing.
            sync_writes: fsync the log after every append.

        Returns:
            A loaded Store.

        Raises:
            FileError: If the log file cannot be created or opened.
            ProcessRecordError: If the log ends in a partial record.
        """
        store = cls(path, sync_writes=sync_writes)
        try:
            store.load()
        except Exception:
            store.close()
            raise
        return store

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_closed(self) -> bool:
        return not self._log.is_open

    def _ensure_open(self) -> None:
        if not self._log.is_open:
            raise RuntimeError("Store is closed")

    def load(self) -> int:
        """
        Rebuild the index by replaying the whole log from offset 0.

        Returns:
            Number of records replayed.

        Raises:
            ProcessRecordError: If a truncated record is found. Records
                before it stay indexed.
        """
        self._ensure_open()
        self._index.clear()
        count = self._loader.load(self._log, self._index)
        logging.info(
            f"Loaded {count} records ({self._index.size()} keys) from {self._path}"
        )
        return count

    def get(self, key: bytes) -> bytes:
        """
        Retrieve the latest value for a key.

        Args:
            key: The key to look up.

        Returns:
            The stored value; empty if the key was deleted.

        Raises:
            KeyNotIndexedError: If the key was never written.
            TypeError: If key is not bytes-like.
            PositionError: If the log cannot be positioned at the record.
            ProcessRecordError: If no matching record is found at the
                indexed offset.
        """
        self._ensure_open()
        offset = self._index.get(key)
        if offset is None:
            raise KeyNotIndexedError(bytes(key))

        result = decode(self._log.read_from(offset))
        if isinstance(result, CorruptRecord):
            raise ProcessRecordError(offset, result.reason)
        if not isinstance(result, DecodedRecord):
            raise ProcessRecordError(offset, "unexpected end of log")

        record = result.record
        if record.key != bytes(key):
            raise ProcessRecordError(offset, f"expected key {bytes(key)!r}, found {record.key!r}")

        logging.debug(f"Read {len(record.value)} byte value for {record.key!r} at offset {offset}")
        return record.value

    def insert(self, key: bytes, value: bytes) -> None:
        """
        Insert or update a key-value pair.

        The record is appended at the end of the log and the index is only
        updated once the append has succeeded.

        Args:
            key: The key to insert/update.
            value: The value to store.

        Raises:
            WriteError: If the record cannot be encoded or written.
        """
        self._ensure_open()
        try:
            data = encode(key, value)
        except (TypeError, ValueError) as e:
            raise WriteError(str(e)) from e

        offset = self._log.append(data)
        self._index.set(key, offset)

    def delete(self, key: bytes) -> None:
        """
        Delete a key by appending a tombstone.

        The key stays in the index and get() returns an empty value for it.

        Raises:
            WriteError: If the tombstone cannot be written.
        """
        self.insert(key, b"")

    def has(self, key: bytes) -> bool:
        return self._index.has(key)

    def keys(self) -> Iterator[bytes]:
        return iter(self._index)

    def offset_of(self, key: bytes) -> int | None:
        """Return the log offset of the latest record for a key, if any."""
        return self._index.get(key)

    def index_snapshot(self) -> dict[bytes, int]:
        """Return a copy of the key -> offset index."""
        return self._index.snapshot()

    def size_bytes(self) -> int:
        """Return the current size of the log in bytes."""
        self._ensure_open()
        return self._log.size()

    def close(self) -> None:
        """Flush and close the log file. Safe to call more than once."""
        if self._log.is_open:
            self._log.close()
            logging.info(f"Closed store {self._path}")

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return self._index.size()

    def __enter__(self) -> "Store":
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
