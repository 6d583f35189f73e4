"""
Abstract base classes for the key-value store.
"""

from logkv.interfaces.key_value_store import KeyValueStore

__all__ = ["KeyValueStore"]
