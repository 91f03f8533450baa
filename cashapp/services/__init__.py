"""Services package."""

from cashapp.services.codec import decode_items, encode_items
from cashapp.services.storage import (
    DataCorruptError,
    FilePersistenceAdapter,
    InMemoryPersistenceAdapter,
    PersistenceAdapter,
    PersistenceWriteError,
    StorageError,
)

__all__ = [
    # Codec
    "decode_items",
    "encode_items",
    # Storage
    "DataCorruptError",
    "FilePersistenceAdapter",
    "InMemoryPersistenceAdapter",
    "PersistenceAdapter",
    "PersistenceWriteError",
    "StorageError",
]
