"""
Custom exceptions for the key-value store.
"""


class StoreError(Exception):
    """Base class for all errors raised by the store."""


class FileError(StoreError):
    """
    Raised when the log file cannot be created or opened.

    Typical causes are missing permissions or an invalid path.
    """

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Cannot open log file {file_path}: {reason}")


class PositionError(StoreError):
    """Raised when seeking to an offset within the log fails."""

    def __init__(self, offset: int, reason: str):
        self.offset = offset
        self.reason = reason
        super().__init__(f"Cannot seek to offset {offset}: {reason}")


class ProcessRecordError(StoreError):
    """
    Raised when no well-formed record exists where one is expected.

    Covers a corrupt or truncated header, a body shorter than its declared
    length, and an index offset that points at the wrong record.
    """

    def __init__(self, offset: int, reason: str):
        """
        Initialize record error.

        Args:
            offset: File offset where the record was expected to start.
            reason: Human readable description of the failure.
        """
        self.offset = offset
        self.reason = reason
        super().__init__(f"Invalid record at offset {offset}: {reason}")


class KeyNotIndexedError(StoreError, LookupError):
    """Raised when a key is looked up that was never written."""

    def __init__(self, key: bytes):
        self.key = key
        super().__init__(f"Key not found: {key!r}")


class WriteError(StoreError):
    """Raised when a record cannot be encoded, appended or flushed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Write failed: {reason}")
