"""
Key-value storage backends.

A backend maps string keys to string values, the same contract as browser
local storage. Collections are stored as JSON text under one key each; the
backend itself knows nothing about records.
"""
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from intellotask.config import Settings, ensure_storage_directory
from intellotask.exceptions import StorageError

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the key was never set."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key. Removing a missing key is a no-op."""

    @abstractmethod
    def keys(self) -> List[str]:
        """List all keys currently set."""

    def contains(self, key: str) -> bool:
        return self.get_item(key) is not None


class MemoryStorage(StorageBackend):
    """In-process dict storage. Contents are lost when the object goes away."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)


class FileStorage(StorageBackend):
    """
    Directory-backed storage, one ``<key>.json`` file per key.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers never observe a half-written value.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str):
        self.directory = ensure_storage_directory(directory)

    def _path_for(self, key: str) -> str:
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise StorageError(f"Invalid storage key: {key!r}", key=key)
        return os.path.join(self.directory, key + self.SUFFIX)

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}", key=key, original_error=e) from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write {path}", key=key, original_error=e) from e
        logger.debug(f"Wrote {len(value)} bytes to {path}")

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass

    def keys(self) -> List[str]:
        return sorted(
            name[: -len(self.SUFFIX)]
            for name in os.listdir(self.directory)
            if name.endswith(self.SUFFIX) and not name.startswith(".")
        )


def create_storage(settings: Settings) -> StorageBackend:
    """Build the backend selected by settings.storage_backend."""
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return MemoryStorage()
    logger.info(f"Using file storage at {settings.storage_path}")
    return FileStorage(settings.storage_path)
