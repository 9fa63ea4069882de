"""Read-only access to the edge node metadata store"""

from .base import InMemoryMetaStore, MetaStore
from .sqlite import SQLiteMetaStore

__all__ = ["MetaStore", "InMemoryMetaStore", "SQLiteMetaStore"]
