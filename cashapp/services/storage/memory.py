"""
In-Memory Persistence

Process-local key-value store. Used in tests and whenever no storage
directory is configured. Contents vanish with the process.
"""

from typing import Optional

from cashapp.services.storage.interface import (
    PersistenceAdapter,
    PersistenceWriteError,
)


class InMemoryPersistenceAdapter(PersistenceAdapter):
    """Dict-backed persistence adapter."""
    
    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})
    
    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)
    
    def set(self, key: str, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise PersistenceWriteError(
                f"Expected bytes for {key}, got {type(data).__name__}"
            )
        self._data[key] = bytes(data)
    