"""
Abstract Persistence Interface

DESIGN DECISION: The store never talks to a concrete storage mechanism.
It is handed an adapter with two operations - read bytes for a key,
write bytes for a key. This allows us to:
1. Swap the file-backed store for anything else with get/set semantics
2. Use in-memory storage for testing
3. Keep the item store decoupled from where the bytes live

The interface is intentionally tiny. It is a key-value byte store,
nothing more.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PersistenceAdapter(ABC):
    """
    Abstract key-value byte store.
    
    Any persistence implementation must implement these methods.
    """
    
    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the bytes stored under a key.
        
        Args:
            key: Storage key
            
        Returns:
            The stored bytes, or None if nothing is stored
            
        Raises:
            StorageError: If the backend cannot be read
        """
        pass
    
    @abstractmethod
    def set(self, key: str, data: bytes) -> None:
        """
        Store bytes under a key, replacing any previous value.
        
        Args:
            key: Storage key
            data: Bytes to store
            
        Raises:
            PersistenceWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DataCorruptError(StorageError):
    """Stored bytes could not be decoded into expense items."""
    pass


class PersistenceWriteError(StorageError):
    """Could not write to the storage backend."""
    pass
