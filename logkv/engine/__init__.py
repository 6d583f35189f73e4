"""
Storage engine: the Store façade and log replay.
"""

from logkv.engine.loader import IndexLoader
from logkv.engine.store import Store

__all__ = ["IndexLoader", "Store"]
