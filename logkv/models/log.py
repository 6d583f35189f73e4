import logging
import os
from pathlib import Path
from typing import BinaryIO

from logkv.models.exceptions import FileError, PositionError, WriteError

logger = logging.getLogger(__name__)


class Log:
    """
    Append-only, byte-addressable log file.

    Bytes are only ever added at the end of the file; nothing already
    written is modified. The file is created if missing and never
    truncated on open, so its contents survive restarts.
    """

    def __init__(self, file_path: str, sync_writes: bool = False) -> None:
        """
        Initialize Log.

        Args:
            file_path: Path to the log file.
            sync_writes: If True, fsync after every append.
        """
        self.file_path = file_path
        self.sync_writes = sync_writes
        self._file: BinaryIO | None = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        """
        Open the log file for reading and appending.

        Raises:
            FileError: If the file or its parent directory cannot be created
                or opened.
            RuntimeError: If the log is already open.
        """
        if self._file is not None:
            raise RuntimeError("Log is already open")
        try:
            Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.file_path, "ab+")
        except OSError as e:
            raise FileError(self.file_path, e.strerror or str(e)) from e
        logger.debug(f"Opened log {self.file_path} ({self.size()} bytes)")

    def _require_open(self) -> BinaryIO:
        if self._file is None:
            raise RuntimeError("Log is not open")
        return self._file

    def _perform_flush(self) -> None:
        """Push buffered bytes to the OS, and to disk when sync_writes is set."""
        self._file.flush()
        if self.sync_writes:
            # Use fdatasync if available (Linux), fallback to fsync (macOS/Windows)
            _sync_data = getattr(os, "fdatasync", os.fsync)
            _sync_data(self._file.fileno())

    def append(self, data: bytes) -> int:
        """
        Write bytes at the end of the log.

        Args:
            data: Bytes to append.

        Returns:
            Offset at which the bytes begin.

        Raises:
            WriteError: If the write or flush fails.
        """
        f = self._require_open()
        try:
            offset = f.seek(0, os.SEEK_END)
            f.write(data)
            self._perform_flush()
        except OSError as e:
            raise WriteError(f"{self.file_path}: {e.strerror or e}") from e

        logger.debug(f"Appended {len(data)} bytes at offset {offset}")
        return offset

    def read_from(self, offset: int) -> BinaryIO:
        """
        Position the log for sequential reading.

        Args:
            offset: Absolute byte offset to read from.

        Returns:
            The underlying stream, positioned at offset.

        Raises:
            PositionError: If offset is negative or the seek fails.
        """
        f = self._require_open()
        if offset < 0:
            raise PositionError(offset, "offset must be >= 0")
        try:
            f.seek(offset, os.SEEK_SET)
        except (OSError, ValueError) as e:
            raise PositionError(offset, str(e)) from e
        return f

    def size(self) -> int:
        """Return the current end-of-data offset."""
        f = self._require_open()
        f.flush()
        return os.fstat(f.fileno()).st_size

    def close(self) -> None:
        """Close the log file, flushing pending writes."""
        if self._file:
            self._perform_flush()
            self._file.close()
            self._file = None
            logger.debug(f"Closed log {self.file_path}")

    def __enter__(self) -> "Log":
        if self._file is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
