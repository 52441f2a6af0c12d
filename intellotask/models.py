"""
Domain records for users, tasks and comments.

Records serialize with camelCase field names so that the persisted layout
matches the JSON arrays stored under each collection key. Python code uses
the snake_case attribute names.
"""
import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(StrEnum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class UserStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


UNKNOWN_USER = "Unknown User"


def new_id() -> str:
    """Generate a collision-resistant record identifier."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string ending in 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class Record(BaseModel):
    """Base for persisted records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted (camelCase) representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(Record):
    name: str
    email: str
    # Plaintext, kept for compatibility with existing stored data.
    password: str
    role: Role
    department: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE
    created_at: str = Field(default_factory=utc_now_iso)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_active_employee(self) -> bool:
        return self.role == Role.EMPLOYEE and self.status == UserStatus.ACTIVE


class Comment(Record):
    task_id: str
    user_id: str
    user_name: str
    content: str
    created_at: str = Field(default_factory=utc_now_iso)


class Task(Record):
    title: str
    description: str
    assigned_to: str
    assigned_by: str
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: str
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    attachments: Optional[List[str]] = None
    comments: Optional[List[Comment]] = None
