"""Storage backends.

This module exports the backend interface and its implementations.
"""

from lowdocdb.backend.base import EntryKind, StorageBackend, StorageEntry
from lowdocdb.backend.local import LocalBackend
from lowdocdb.backend.memory import MemoryBackend

__all__ = [
    "EntryKind",
    "LocalBackend",
    "MemoryBackend",
    "StorageBackend",
    "StorageEntry",
]
