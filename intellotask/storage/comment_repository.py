"""
Repository for comment operations.
"""
from typing import List

from intellotask.models import Comment
from intellotask.storage.repository import RecordRepository


class CommentRepository(RecordRepository):
    """Repository for comment records."""

    entity_name = "comment"

    def list_for_task(self, task_id: str) -> List[Comment]:
        """Get comments for a task, oldest first in stored order."""
        return [comment for comment in self.store.read() if comment.task_id == task_id]
