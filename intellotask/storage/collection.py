"""
Whole-collection snapshot access over a StorageBackend.

Each collection lives under one key as a JSON array. Reads deserialize the
full array, writes serialize the full array back. Read-modify-write cycles
run under a re-entrant lock so callers in the same process cannot drop each
other's writes.
"""
import json
import logging
import threading
from typing import Callable, Iterable, List, Optional, Type

from pydantic import ValidationError as ModelValidationError

from intellotask.exceptions import CorruptStoreError
from intellotask.models import Record
from intellotask.storage.backends import StorageBackend

logger = logging.getLogger(__name__)


class CollectionStore:
    """Snapshot reader/writer for one collection key."""

    def __init__(
        self,
        backend: StorageBackend,
        key: str,
        model: Type[Record],
        *,
        reset_on_corrupt: bool = False,
        lock: Optional[threading.RLock] = None
    ):
        """
        Initialize CollectionStore.

        Args:
            backend: Storage backend holding the serialized array
            key: Storage key of the collection
            model: Record class used to validate each element
            reset_on_corrupt: Reset a malformed collection to [] instead of raising
            lock: Optional lock shared with other stores
        """
        self.backend = backend
        self.key = key
        self.model = model
        self.reset_on_corrupt = reset_on_corrupt
        self._lock = lock or threading.RLock()

    def exists(self) -> bool:
        """True if the key has ever been initialized."""
        return self.backend.contains(self.key)

    def read(self) -> List[Record]:
        """
        Read the full collection.

        Returns:
            List of records, empty if the key was never initialized

        Raises:
            CorruptStoreError: If the stored value is not a valid array of records
                and reset_on_corrupt is off
        """
        raw = self.backend.get_item(self.key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise CorruptStoreError(self.key, reason=f"expected an array, found {type(data).__name__}")
            records = [self.model.model_validate(item) for item in data]
        except (json.JSONDecodeError, ModelValidationError, TypeError, CorruptStoreError) as e:
            if self.reset_on_corrupt:
                logger.warning(f"Collection {self.key} is corrupt, resetting to empty: {e}")
                self.write([])
                return []
            if isinstance(e, CorruptStoreError):
                raise
            raise CorruptStoreError(self.key, reason=str(e), original_error=e) from e

        logger.debug(f"Read {len(records)} records from {self.key}")
        return records

    def write(self, records: Iterable[Record]) -> None:
        """Replace the stored collection with records."""
        payload = [record.to_record() for record in records]
        self.backend.set_item(self.key, json.dumps(payload))
        logger.debug(f"Wrote {len(payload)} records to {self.key}")

    def mutate(self, fn: Callable[[List[Record]], bool]) -> bool:
        """
        Run a read-modify-write cycle under the lock.

        Args:
            fn: Receives the current snapshot, mutates it in place and returns
                True if it changed anything

        Returns:
            Whatever fn returned; the snapshot is written back only when True
        """
        with self._lock:
            records = self.read()
            changed = fn(records)
            if changed:
                self.write(records)
            return changed

    def initialize(self, records: Iterable[Record]) -> bool:
        """
        Write records only if the key is absent.

        Returns:
            True if the collection was seeded, False if it already existed
        """
        with self._lock:
            if self.exists():
                return False
            self.write(records)
            return True
