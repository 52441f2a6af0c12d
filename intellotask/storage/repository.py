"""
Base repository: entity-scoped CRUD over a CollectionStore.

Lookups are linear scans of the snapshot. Missing ids are never an error:
get returns None, update and delete return False and leave the collection
untouched.
"""
import logging
from typing import List, Optional

from intellotask.models import Record
from intellotask.storage.collection import CollectionStore

logger = logging.getLogger(__name__)


class RecordRepository:
    """CRUD operations shared by all record types."""

    entity_name = "record"

    def __init__(self, store: CollectionStore):
        """
        Initialize repository.

        Args:
            store: Collection store for this record type
        """
        self.store = store

    def list(self) -> List[Record]:
        """Return the full collection snapshot."""
        return self.store.read()

    def get(self, record_id: str) -> Optional[Record]:
        """
        Get a record by ID.

        Returns:
            The record, or None if not found
        """
        for record in self.store.read():
            if record.id == record_id:
                return record
        return None

    def add(self, record: Record) -> None:
        """Append a record. No duplicate-id check is performed."""
        def _append(records: List[Record]) -> bool:
            records.append(record)
            return True

        self.store.mutate(_append)
        logger.info(f"Added {self.entity_name} {record.id}")

    def _prepare_update(self, record: Record) -> Record:
        return record

    def update(self, record: Record) -> bool:
        """
        Replace the stored record that has the same ID.

        Returns:
            True if a record was replaced, False if the ID was not found
        """
        replacement = self._prepare_update(record)

        def _replace(records: List[Record]) -> bool:
            for index, existing in enumerate(records):
                if existing.id == replacement.id:
                    records[index] = replacement
                    return True
            return False

        updated = self.store.mutate(_replace)
        if updated:
            logger.info(f"Updated {self.entity_name} {record.id}")
        else:
            logger.debug(f"Update skipped, {self.entity_name} {record.id} not found")
        return updated

    def delete(self, record_id: str) -> bool:
        """
        Remove the record with the given ID. Nothing else is cascaded.

        Returns:
            True if a record was removed, False if it was already absent
        """
        def _remove(records: List[Record]) -> bool:
            kept = [r for r in records if r.id != record_id]
            if len(kept) == len(records):
                return False
            records[:] = kept
            return True

        deleted = self.store.mutate(_remove)
        if deleted:
            logger.info(f"Deleted {self.entity_name} {record_id}")
        return deleted
