"""
File-Backed Persistence

DESIGN DECISION: Each key is one file in a storage directory.
This is the closest thing to a desktop "defaults" store:
1. Nothing to install or configure beyond a directory
2. Users can back up or inspect the files directly
3. One key per file means collections never clobber each other

Writes go to a temporary file first and are then renamed over the
target, so a crash mid-write leaves the previous value intact.
Transient OS errors are retried with exponential back-off.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cashapp.services.storage.interface import (
    PersistenceAdapter,
    PersistenceWriteError,
    StorageError,
)


_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

logger = structlog.get_logger(__name__)


class FilePersistenceAdapter(PersistenceAdapter):
    """
    Stores each key as a file under a directory.
    
    The directory is created lazily on the first write.
    """
    
    def __init__(
        self,
        directory: Union[str, Path],
        write_attempts: int = 3,
        retry_wait_seconds: float = 0.5,
    ):
        """
        Initialize the adapter.
        
        Args:
            directory: Where key files live
            write_attempts: Total tries per write before giving up
            retry_wait_seconds: Base delay for exponential back-off
        """
        if write_attempts < 1:
            raise ValueError("write_attempts must be at least 1")
        self._directory = Path(directory).expanduser()
        self._write_attempts = write_attempts
        self._retry_wait_seconds = retry_wait_seconds
    
    @property
    def directory(self) -> Path:
        return self._directory
    
    def _path_for(self, key: str) -> Path:
        """Map a key to its file, rejecting anything that could escape the directory."""
        if not _VALID_KEY.match(key) or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / key
    
    def get(self, key: str) -> Optional[bytes]:
        """Read a key's bytes, or None if the key was never written."""
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}")
    
    def set(self, key: str, data: bytes) -> None:
        """Write a key's bytes atomically, retrying transient failures."""
        path = self._path_for(key)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(
                multiplier=self._retry_wait_seconds,
                max=self._retry_wait_seconds * 8,
            ),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            "persistence_write_retry",
                            key=key,
                            attempt=attempt.retry_state.attempt_number,
                        )
                    self._write_atomic(path, data)
        except OSError as e:
            raise PersistenceWriteError(f"Failed to write {key}: {e}")
    
    def _write_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Leave no partial temp files behind
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
