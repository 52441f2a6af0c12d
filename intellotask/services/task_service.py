"""
Task service - business logic for task and comment operations.
This layer contains no presentation dependencies.
Handles validation, role rules and timestamps; storage goes through DataService.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from intellotask import views
from intellotask.data_service import DataService
from intellotask.exceptions import PermissionDeniedError, TaskNotFoundError, ValidationError
from intellotask.models import (
    Comment,
    Task,
    TaskPriority,
    TaskStatus,
    User,
    new_id,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"title", "description", "assigned_to", "status", "priority", "due_date"}


def _validate_status(status: str) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Invalid status: {status}. Must be one of: {allowed}", field="status", value=status)


def _validate_priority(priority: str) -> TaskPriority:
    try:
        return TaskPriority(priority)
    except ValueError:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise ValidationError(f"Invalid priority: {priority}. Must be one of: {allowed}", field="priority", value=priority)


def _validate_due_date(due_date: str) -> str:
    try:
        return date.fromisoformat(due_date).isoformat()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid due date: {due_date}. Expected YYYY-MM-DD", field="due_date", value=due_date)


def _require_text(value: Optional[str], field: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} is required", field=field)
    return value.strip()


class TaskService:
    """Service for task business logic."""

    def __init__(self, data_service: DataService):
        """Initialize task service with data service dependency."""
        self.data = data_service

    def _check_owner(self, current_user: User, task: Task, action: str) -> None:
        if not current_user.is_admin and task.assigned_to != current_user.id:
            raise PermissionDeniedError(action, current_user.role)

    def create_task(
        self,
        current_user: User,
        title: str,
        description: str,
        due_date: str,
        priority: str = TaskPriority.MEDIUM,
        status: str = TaskStatus.PENDING,
        assigned_to: Optional[str] = None
    ) -> Task:
        """
        Create a new task.

        Employees always assign the task to themselves. Admins must name an
        assignee; the assignee is not checked against the user collection.

        Args:
            current_user: User creating the task (becomes assignedBy)
            title: Task title
            description: Task description
            due_date: Due date as YYYY-MM-DD
            priority: low, medium or high
            status: pending, in-progress or completed
            assigned_to: Assignee user ID (ignored for employees)

        Returns:
            The stored task

        Raises:
            ValidationError: If a field is missing or invalid
        """
        if not current_user.is_admin:
            assigned_to = current_user.id
        elif not assigned_to:
            raise ValidationError("Assignee is required", field="assigned_to")

        now = utc_now_iso()
        task = Task(
            id=new_id(),
            title=_require_text(title, "title"),
            description=_require_text(description, "description"),
            assigned_to=assigned_to,
            assigned_by=current_user.id,
            status=_validate_status(status),
            priority=_validate_priority(priority),
            due_date=_validate_due_date(due_date),
            created_at=now,
            updated_at=now,
        )
        self.data.tasks.add(task)
        return task

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.data.tasks.get(task_id)

    def update_task(self, current_user: User, task_id: str, **changes: Any) -> Task:
        """
        Merge changes into a stored task.

        Args:
            current_user: User performing the edit
            task_id: Task ID
            **changes: Any of title, description, assigned_to, status, priority, due_date

        Returns:
            The updated task as stored (with a fresh updatedAt)

        Raises:
            TaskNotFoundError: If the task does not exist or disappears before the write
            PermissionDeniedError: If an employee edits someone else's task
            ValidationError: If a field is unknown or invalid
        """
        task = self.data.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        self._check_owner(current_user, task, "edit this task")

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown task fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        cleaned: Dict[str, Any] = {}
        for field, value in changes.items():
            if value is None:
                continue
            if field in ("title", "description"):
                cleaned[field] = _require_text(value, field)
            elif field == "status":
                cleaned[field] = _validate_status(value)
            elif field == "priority":
                cleaned[field] = _validate_priority(value)
            elif field == "due_date":
                cleaned[field] = _validate_due_date(value)
            elif field == "assigned_to":
                if not current_user.is_admin and value != current_user.id:
                    raise PermissionDeniedError("reassign tasks", current_user.role)
                cleaned[field] = value

        if not self.data.tasks.update(task.model_copy(update=cleaned)):
            raise TaskNotFoundError(task_id)
        updated = self.data.tasks.get(task_id)
        if updated is None:
            raise TaskNotFoundError(task_id)
        return updated

    def delete_task(self, current_user: User, task_id: str) -> bool:
        """
        Delete a task. Comments on it are left in place.

        Returns:
            True if deleted, False if it did not exist
        """
        task = self.data.tasks.get(task_id)
        if task is None:
            return False
        self._check_owner(current_user, task, "delete this task")
        return self.data.tasks.delete(task_id)

    def list_tasks(
        self,
        current_user: User,
        search: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> List[Task]:
        """Role-scoped task list narrowed by search, status and priority."""
        scoped = views.role_scoped_tasks(self.data.get_tasks(), current_user)
        return views.filter_tasks(scoped, search=search, status=status, priority=priority)

    def kanban(self, current_user: User) -> Dict[str, List[Task]]:
        return views.group_by_status(self.list_tasks(current_user))

    def assignee_name(self, task: Task) -> str:
        return self.data.resolve_user_name(task.assigned_to)

    def add_comment(self, current_user: User, task_id: str, content: str) -> Comment:
        """
        Add a comment to a task.

        The author's name is copied onto the comment and is not refreshed if
        the user is renamed later.

        Raises:
            TaskNotFoundError: If the task does not exist
            ValidationError: If content is blank
        """
        if self.data.tasks.get(task_id) is None:
            raise TaskNotFoundError(task_id)
        comment = Comment(
            id=new_id(),
            task_id=task_id,
            user_id=current_user.id,
            user_name=current_user.name,
            content=_require_text(content, "content"),
            created_at=utc_now_iso(),
        )
        self.data.comments.add(comment)
        return comment

    def list_comments(self, task_id: str) -> List[Comment]:
        return self.data.get_comments_by_task_id(task_id)
