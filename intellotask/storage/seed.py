"""
Demo data applied on first run.

Each collection is seeded only when its key is absent, so running the
seeding step repeatedly never overwrites existing data.
"""
import logging
from typing import Dict, List

from intellotask.models import (
    Role,
    Task,
    TaskPriority,
    TaskStatus,
    User,
    UserStatus,
    utc_now_iso,
)

logger = logging.getLogger(__name__)


def default_users() -> List[User]:
    """One admin and two employees."""
    now = utc_now_iso()
    return [
        User(
            id="1",
            name="Admin User",
            email="admin@intellotask.com",
            password="admin123",
            role=Role.ADMIN,
            department="Management",
            status=UserStatus.ACTIVE,
            created_at=now,
        ),
        User(
            id="2",
            name="John Smith",
            email="john@intellotask.com",
            password="emp123",
            role=Role.EMPLOYEE,
            department="Development",
            status=UserStatus.ACTIVE,
            created_at=now,
        ),
        User(
            id="3",
            name="Sarah Johnson",
            email="sarah@intellotask.com",
            password="emp123",
            role=Role.EMPLOYEE,
            department="Design",
            status=UserStatus.ACTIVE,
            created_at=now,
        ),
    ]


def default_tasks() -> List[Task]:
    """Three sample tasks with varied status, priority and due dates."""
    now = utc_now_iso()
    return [
        Task(
            id="1",
            title="Website Redesign",
            description="Complete redesign of company website with modern UI/UX",
            assigned_to="2",
            assigned_by="1",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date="2024-02-15",
            created_at=now,
            updated_at=now,
        ),
        Task(
            id="2",
            title="Mobile App Testing",
            description="Comprehensive testing of mobile application features",
            assigned_to="3",
            assigned_by="1",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            due_date="2024-02-20",
            created_at=now,
            updated_at=now,
        ),
        Task(
            id="3",
            title="Database Optimization",
            description="Optimize database queries for better performance",
            assigned_to="2",
            assigned_by="1",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.HIGH,
            due_date="2024-01-30",
            created_at=now,
            updated_at=now,
        ),
    ]


def seed_collections(users_store, tasks_store, comments_store) -> Dict[str, bool]:
    """
    Seed each collection whose key is missing.

    Returns:
        Mapping of collection name to whether it was seeded on this call
    """
    seeded = {
        "users": users_store.initialize(default_users()),
        "tasks": tasks_store.initialize(default_tasks()),
        "comments": comments_store.initialize([]),
    }
    for name, applied in seeded.items():
        if applied:
            logger.info(f"Seeded {name} collection with demo data")
    return seeded
