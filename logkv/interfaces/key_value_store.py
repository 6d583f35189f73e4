"""
KeyValueStore abstract base class for byte-oriented key-value stores.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Abstract base class for stores mapping byte keys to byte values.

    Implementations:
    - Store: append-only log with an in-memory hash index
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes:
        """
        Retrieve the latest value written for a key.

        Args:
            key: The key to look up.

        Returns:
            The stored value. Deleted keys yield an empty value.

        Raises:
            KeyNotIndexedError: If the key was never written.
        """
        pass

    @abstractmethod
    def insert(self, key: bytes, value: bytes) -> None:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to insert/update.
            value: The value to associate with the key.
        """
        pass

    @abstractmethod
    def delete(self, key: bytes) -> None:
        """
        Delete a key by writing a tombstone (an empty value).

        Args:
            key: The key to delete.
        """
        pass
