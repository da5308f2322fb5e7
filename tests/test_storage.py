"""Tests for the persistent key-value adapter"""
import json
from unittest.mock import Mock

import pytest

from storefront.storage import (
    FileBackend,
    MemoryBackend,
    PersistentStorage,
    create_backend,
)


class TestPersistentStorage:
    """Load/save semantics over the in-memory backend."""

    def test_load_missing_key_is_empty(self, storage):
        assert storage.load("shopping-cart") == []

    def test_save_then_load(self, storage, backend):
        items = [{"id": "1-1", "productId": 1, "name": "Coat", "price": 900, "quantity": 1, "image": ""}]

        assert storage.save("shopping-cart", items) is True
        assert json.loads(backend.get("shopping-cart")) == items
        assert storage.load("shopping-cart") == items

    def test_save_overwrites(self, storage):
        storage.save("k", [{"a": 1}])
        storage.save("k", [])

        assert storage.load("k") == []

    def test_invalid_json_degrades_to_empty(self, storage, backend):
        backend.set("shopping-cart", "{not json")

        assert storage.load("shopping-cart") == []

    def test_non_list_payload_degrades_to_empty(self, storage, backend):
        backend.set("shopping-cart", '{"items": []}')

        assert storage.load("shopping-cart") == []

    def test_backend_read_failure_degrades_to_empty(self):
        backend = Mock()
        backend.get.side_effect = ConnectionError("redis down")

        assert PersistentStorage(backend).load("shopping-cart") == []

    def test_backend_write_failure_is_swallowed(self):
        backend = Mock()
        backend.set.side_effect = OSError("quota exceeded")

        assert PersistentStorage(backend).save("shopping-cart", [{"id": "x"}]) is False

    def test_clear(self, storage):
        storage.save("k", [{"a": 1}])

        assert storage.clear("k") is True
        assert storage.load("k") == []


class TestFileBackend:
    """JSON files on disk."""

    def test_roundtrip(self, tmp_path):
        backend = FileBackend(tmp_path / "state")

        assert backend.get("shopping-cart") is None
        backend.set("shopping-cart", "[1, 2]")

        assert backend.get("shopping-cart") == "[1, 2]"
        assert (tmp_path / "state" / "shopping-cart.json").exists()

    def test_survives_new_instance(self, tmp_path):
        FileBackend(tmp_path).set("product-wishlist", "[]")

        assert FileBackend(tmp_path).get("product-wishlist") == "[]"

    def test_no_temp_files_left(self, tmp_path):
        backend = FileBackend(tmp_path)
        backend.set("k", "a")
        backend.set("k", "b")

        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_delete_missing_key(self, tmp_path):
        FileBackend(tmp_path).delete("absent")


class TestCreateBackend:

    def test_memory(self):
        assert isinstance(create_backend("memory"), MemoryBackend)

    def test_file(self):
        assert isinstance(create_backend("file"), FileBackend)

    def test_redis_requires_credentials(self, monkeypatch):
        from storefront import config

        monkeypatch.setattr(config, "UPSTASH_REDIS_REST_URL", "")
        monkeypatch.setattr(config, "UPSTASH_REDIS_REST_TOKEN", "")

        with pytest.raises(ValueError):
            create_backend("redis")

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_backend("localstorage")
