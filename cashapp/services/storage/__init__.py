"""
Storage Services Package

Provides the abstract persistence interface and concrete adapters.
"""

from cashapp.services.storage.interface import (
    DataCorruptError,
    PersistenceAdapter,
    PersistenceWriteError,
    StorageError,
)
from cashapp.services.storage.memory import InMemoryPersistenceAdapter
from cashapp.services.storage.file_store import FilePersistenceAdapter

__all__ = [
    # Interface
    "PersistenceAdapter",
    # Exceptions
    "DataCorruptError",
    "PersistenceWriteError",
    "StorageError",
    # Implementations
    "FilePersistenceAdapter",
    "InMemoryPersistenceAdapter",
]
