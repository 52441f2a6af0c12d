"""
Repository for task operations.
"""
from typing import List

from intellotask.models import Task, utc_now_iso
from intellotask.storage.repository import RecordRepository


class TaskRepository(RecordRepository):
    """Repository for task records."""

    entity_name = "task"

    def _prepare_update(self, record: Task) -> Task:
        # updatedAt is always stamped here, whatever the caller passed in.
        return record.model_copy(update={"updated_at": utc_now_iso()})

    def list_for_user(self, user_id: str) -> List[Task]:
        """
        Get tasks assigned to a user.

        Args:
            user_id: User ID to match against assignedTo

        Returns:
            List of tasks in stored order
        """
        return [task for task in self.store.read() if task.assigned_to == user_id]
