"""
Pytest configuration and shared fixtures.
Provides an in-memory DataService and helpers for building records.
"""
import pytest

from intellotask.config import Settings
from intellotask.data_service import DataService
from intellotask.models import Role, Task, TaskPriority, TaskStatus, User, UserStatus, new_id
from intellotask.storage.backends import MemoryStorage


def make_user(
    user_id=None,
    name="Test User",
    email=None,
    password="secret",
    role=Role.EMPLOYEE,
    department=None,
    status=UserStatus.ACTIVE,
    created_at="2026-01-05T09:00:00Z",
):
    """Build a User record with sensible defaults."""
    user_id = user_id or new_id()
    return User(
        id=user_id,
        name=name,
        email=email or f"{user_id}@example.com",
        password=password,
        role=role,
        department=department,
        status=status,
        created_at=created_at,
    )


def make_task(
    task_id=None,
    title="Test Task",
    description="Something to do",
    assigned_to="2",
    assigned_by="1",
    status=TaskStatus.PENDING,
    priority=TaskPriority.MEDIUM,
    due_date="2026-02-01",
    created_at="2026-01-10T12:00:00Z",
    updated_at=None,
):
    """Build a Task record with sensible defaults."""
    return Task(
        id=task_id or new_id(),
        title=title,
        description=description,
        assigned_to=assigned_to,
        assigned_by=assigned_by,
        status=status,
        priority=priority,
        due_date=due_date,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary directory, no automatic seeding."""
    return Settings(
        storage_backend="memory",
        storage_path=str(tmp_path / "data"),
        seed_demo_data=False,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def data_service(storage, settings):
    """Empty DataService over an in-memory backend."""
    return DataService(storage, settings)


@pytest.fixture
def seeded_service(data_service):
    """DataService with the demo users and tasks loaded."""
    data_service.initialize()
    return data_service


@pytest.fixture
def admin(seeded_service):
    return seeded_service.get_user_by_id("1")


@pytest.fixture
def john(seeded_service):
    return seeded_service.get_user_by_id("2")


@pytest.fixture
def sarah(seeded_service):
    return seeded_service.get_user_by_id("3")
