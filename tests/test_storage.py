"""Tests for the persistence adapters."""

import pytest

from cashapp.services.storage import (
    FilePersistenceAdapter,
    InMemoryPersistenceAdapter,
    PersistenceAdapter,
    PersistenceWriteError,
    StorageError,
)


class TestInMemoryPersistenceAdapter:
    """Tests for the dict-backed adapter."""
    
    def test_is_a_persistence_adapter(self):
        assert isinstance(InMemoryPersistenceAdapter(), PersistenceAdapter)
    
    def test_missing_key_returns_none(self):
        assert InMemoryPersistenceAdapter().get("PrivateItems") is None
    
    def test_set_then_get(self):
        adapter = InMemoryPersistenceAdapter()
        adapter.set("PrivateItems", b"[]")
        assert adapter.get("PrivateItems") == b"[]"
    
    def test_set_overwrites(self):
        adapter = InMemoryPersistenceAdapter({"PrivateItems": b"old"})
        adapter.set("PrivateItems", b"new")
        assert adapter.get("PrivateItems") == b"new"
    
    def test_rejects_non_bytes(self):
        adapter = InMemoryPersistenceAdapter()
        with pytest.raises(PersistenceWriteError):
            adapter.set("PrivateItems", "[]")


class TestFilePersistenceAdapter:
    """Tests for the directory-backed adapter."""
    
    def test_missing_key_returns_none(self, tmp_path):
        adapter = FilePersistenceAdapter(tmp_path / "store")
        assert adapter.get("PrivateItems") is None
    
    def test_set_creates_directory_lazily(self, tmp_path):
        """Test that the directory appears on the first write."""
        directory = tmp_path / "store"
        adapter = FilePersistenceAdapter(directory)
        assert not directory.exists()
        
        adapter.set("PrivateItems", b"[]")
        
        assert (directory / "PrivateItems").read_bytes() == b"[]"
    
    def test_set_then_get(self, tmp_path):
        adapter = FilePersistenceAdapter(tmp_path)
        adapter.set("BusinessItems", b'[{"name": "x"}]')
        assert adapter.get("BusinessItems") == b'[{"name": "x"}]'
    
    def test_set_overwrites_and_leaves_no_temp_files(self, tmp_path):
        adapter = FilePersistenceAdapter(tmp_path)
        adapter.set("PrivateItems", b"first")
        adapter.set("PrivateItems", b"second")
        
        assert adapter.get("PrivateItems") == b"second"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["PrivateItems"]
    
    def test_keys_are_independent(self, tmp_path):
        adapter = FilePersistenceAdapter(tmp_path)
        adapter.set("PrivateItems", b"a")
        adapter.set("BusinessItems", b"b")
        assert adapter.get("PrivateItems") == b"a"
        assert adapter.get("BusinessItems") == b"b"
    
    def test_data_survives_new_adapter(self, tmp_path):
        """Test persistence across 'restarts'."""
        FilePersistenceAdapter(tmp_path).set("PrivateItems", b"[]")
        assert FilePersistenceAdapter(tmp_path).get("PrivateItems") == b"[]"
    
    @pytest.mark.parametrize("key", ["", "..", "../escape", "a/b", "with space"])
    def test_invalid_key_rejected(self, tmp_path, key):
        adapter = FilePersistenceAdapter(tmp_path)
        with pytest.raises(StorageError):
            adapter.get(key)
    
    def test_write_failure_raises_after_retries(self, tmp_path):
        """Test that a directory blocked by a file fails the write."""
        blocker = tmp_path / "blocked"
        blocker.write_bytes(b"not a directory")
        adapter = FilePersistenceAdapter(
            blocker, write_attempts=2, retry_wait_seconds=0
        )
        
        with pytest.raises(PersistenceWriteError):
            adapter.set("PrivateItems", b"[]")
    
    def test_transient_failure_is_retried(self, tmp_path, monkeypatch):
        """Test that one OSError followed by success still writes."""
        adapter = FilePersistenceAdapter(
            tmp_path, write_attempts=3, retry_wait_seconds=0
        )
        original = adapter._write_atomic
        calls = []
        
        def flaky(path, data):
            calls.append(path)
            if len(calls) == 1:
                raise OSError("temporarily unavailable")
            original(path, data)
        
        monkeypatch.setattr(adapter, "_write_atomic", flaky)
        adapter.set("PrivateItems", b"[]")
        
        assert len(calls) == 2
        assert adapter.get("PrivateItems") == b"[]"
    
    def test_write_attempts_must_be_positive(self, tmp_path):
        with pytest.raises(ValueError):
            FilePersistenceAdapter(tmp_path, write_attempts=0)
