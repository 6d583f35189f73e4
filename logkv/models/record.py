"""
KeyValueRecord and the binary codec for log records.

Format (little-endian): [key_len:4][value_len:4][key][value]
"""

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

from logkv.models.exceptions import ProcessRecordError

HEADER_FORMAT = "<II"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

# Largest length representable in a 4-byte header field
MAX_FIELD_LENGTH = 0xFFFFFFFF

# Upper bound on a single read of a record body
READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class KeyValueRecord:
    """
    A single key-value pair as stored in the log.

    Attributes:
        key: Raw key bytes.
        value: Raw value bytes. Empty for a tombstone.
    """

    key: bytes
    value: bytes

    def __bytes__(self) -> bytes:
        return encode(self.key, self.value)

    def size_bytes(self) -> int:
        """Return the encoded size of this record in bytes."""
        return HEADER_SIZE + len(self.key) + len(self.value)

    def is_tombstone(self) -> bool:
        return len(self.value) == 0


@dataclass(frozen=True)
class DecodedRecord:
    """A record read successfully; `size` is the number of bytes consumed."""

    record: KeyValueRecord
    size: int


@dataclass(frozen=True)
class CleanEndOfStream:
    """The source had no bytes left at the start of a record."""


@dataclass(frozen=True)
class CorruptRecord:
    """
    The source held part of a record but not all of it.

    Attributes:
        reason: What was missing.
        bytes_read: How many bytes were consumed before giving up.
    """

    reason: str
    bytes_read: int


DecodeResult = DecodedRecord | CleanEndOfStream | CorruptRecord


def _as_bytes(data: bytes, name: str) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, got {type(data).__name__}")
    data = bytes(data)
    if len(data) > MAX_FIELD_LENGTH:
        raise ValueError(f"{name} too large: {len(data)} bytes (max {MAX_FIELD_LENGTH})")
    return data


def encode(key: bytes, value: bytes) -> bytes:
    """
    Serialize a key-value pair into the on-disk record layout.

    Args:
        key: Raw key bytes.
        value: Raw value bytes.

    Returns:
        The encoded record.

    Raises:
        TypeError: If key or value is not bytes-like.
        ValueError: If key or value does not fit a 4-byte length field.
    """
    key_bytes = _as_bytes(key, "key")
    value_bytes = _as_bytes(value, "value")

    return (
        struct.pack(HEADER_FORMAT, len(key_bytes), len(value_bytes))
        + key_bytes
        + value_bytes
    )


def _read_up_to(source: BinaryIO, length: int) -> bytes:
    """Read up to length bytes, stopping early at end of stream."""
    if length <= READ_CHUNK_SIZE:
        return source.read(length)

    chunks = []
    remaining = length
    while remaining > 0:
        chunk = source.read(min(remaining, READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def decode(source: BinaryIO) -> DecodeResult:
    """
    Read one record from the current position of a binary stream.

    Args:
        source: Readable binary stream.

    Returns:
        DecodedRecord on success, CleanEndOfStream if the stream was already
        exhausted, CorruptRecord if it ended partway through a record.
    """
    header = source.read(HEADER_SIZE)
    if not header:
        return CleanEndOfStream()
    if len(header) < HEADER_SIZE:
        return CorruptRecord(
            reason=f"header truncated: {len(header)} of {HEADER_SIZE} bytes",
            bytes_read=len(header),
        )

    key_len, value_len = struct.unpack(HEADER_FORMAT, header)
    body_len = key_len + value_len
    body = _read_up_to(source, body_len)
    if len(body) < body_len:
        return CorruptRecord(
            reason=f"body truncated: {len(body)} of {body_len} bytes",
            bytes_read=HEADER_SIZE + len(body),
        )

    record = KeyValueRecord(key=body[:key_len], value=body[key_len:])
    return DecodedRecord(record=record, size=HEADER_SIZE + body_len)


def decode_bytes(data: bytes) -> KeyValueRecord:
    """
    Decode a single record held entirely in memory.

    Raises:
        ProcessRecordError: If data does not start with a complete record.
    """
    result = decode(io.BytesIO(data))
    if isinstance(result, DecodedRecord):
        return result.record
    if isinstance(result, CleanEndOfStream):
        raise ProcessRecordError(0, "no data")
    raise ProcessRecordError(0, result.reason)
