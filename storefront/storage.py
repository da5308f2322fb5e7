"""
Persistent key-value adapter for cart and wishlist state.

Each store keeps its whole item list as one JSON array under a fixed key.
Reads never raise: a missing key, an unparsable payload or a failing backend
all degrade to an empty list. Writes never raise either; a failed write is
logged and reported with ``False`` so the in-memory state stays usable.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

from storefront import config
from storefront.logging import get_logger

logger = get_logger(__name__)


class StorageBackend(Protocol):
    """Minimal string key-value medium."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> Any: ...

    def delete(self, key: str) -> Any: ...


class MemoryBackend:
    """Process-local backend. Nothing survives a restart."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileBackend:
    """
    One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write leaves the previous payload intact.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "._-" else "_" for ch in key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class PersistentStorage:
    """JSON serialization of item collections over a ``StorageBackend``."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def load(self, key: str) -> list[dict[str, Any]]:
        """Return the stored collection for ``key``, or ``[]``."""
        try:
            raw = self.backend.get(key)
        except Exception as e:
            logger.warning("Failed to read '%s' from storage: %s", key, e)
            return []

        if not raw:
            return []

        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Corrupted data under '%s', starting empty: %s", key, e)
            return []

        if not isinstance(parsed, list):
            logger.warning(
                "Unexpected payload type under '%s' (%s), starting empty",
                key, type(parsed).__name__,
            )
            return []

        return parsed

    def save(self, key: str, items: list[dict[str, Any]]) -> bool:
        """Overwrite ``key`` with ``items``. Returns False if the write failed."""
        try:
            payload = json.dumps(items, ensure_ascii=False)
            self.backend.set(key, payload)
            return True
        except Exception as e:
            logger.error("Failed to save '%s' to storage: %s", key, e)
            return False

    def clear(self, key: str) -> bool:
        try:
            self.backend.delete(key)
            return True
        except Exception as e:
            logger.error("Failed to clear '%s' from storage: %s", key, e)
            return False


def _create_redis_backend() -> StorageBackend:
    """Upstash Redis sync client; it already speaks get/set/delete."""
    if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
        raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")

    from upstash_redis import Redis

    return Redis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)


def create_backend(kind: str | None = None) -> StorageBackend:
    """
    Build the backend named by ``kind`` (defaults to STORAGE_BACKEND).

    Raises:
        ValueError: unknown backend name or missing Redis credentials
    """
    kind = (kind or config.STORAGE_BACKEND).lower()
    if kind == "memory":
        return MemoryBackend()
    if kind == "file":
        return FileBackend(config.STORAGE_DIR)
    if kind == "redis":
        return _create_redis_backend()
    raise ValueError(f"Unknown STORAGE_BACKEND '{kind}' (expected memory, file or redis)")


def create_storage(kind: str | None = None) -> PersistentStorage:
    """Persistent storage adapter for the configured backend."""
    backend = create_backend(kind)
    logger.info("Using %s storage backend", type(backend).__name__)
    return PersistentStorage(backend)
