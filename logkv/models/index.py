"""
Index - In-memory map from key to the log offset of its latest record.
"""

from collections.abc import Iterator


def _as_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError(f"key must be bytes-like, got {type(key).__name__}")
    return bytes(key)


class Index:
    """
    Hash index over the log.

    Every key maps to the offset where its most recently appended record
    begins. Later writes overwrite earlier ones. The whole key space is
    held in memory; there is no eviction.
    """

    def __init__(self) -> None:
        self._offsets: dict[bytes, int] = {}

    def set(self, key: bytes, offset: int) -> None:
        """
        Insert or overwrite the offset for a key.

        Args:
            key: The record key.
            offset: Byte offset of the record in the log.
        """
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        self._offsets[_as_key(key)] = offset

    def get(self, key: bytes) -> int | None:
        """
        Look up the offset for a key.

        Returns:
            The offset if the key is indexed, None otherwise.

        Raises:
            TypeError: If key is not bytes-like.
        """
        return self._offsets.get(_as_key(key))

    def has(self, key: bytes) -> bool:
        return _as_key(key) in self._offsets

    def is_empty(self) -> bool:
        return not self._offsets

    def size(self) -> int:
        return len(self._offsets)

    def clear(self) -> None:
        self._offsets.clear()

    def items(self) -> Iterator[tuple[bytes, int]]:
        return iter(self._offsets.items())

    def snapshot(self) -> dict[bytes, int]:
        """Return a copy of the key -> offset mapping."""
        return dict(self._offsets)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray, memoryview)) and self.has(key)

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._offsets)
