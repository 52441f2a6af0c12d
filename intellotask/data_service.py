"""
Data access layer.

DataService is the single mediator between the domain records and the
storage backend. It is an ordinary object built around an injected backend;
nothing here is process-global, so tests can hand it a MemoryStorage.
"""
import logging
import threading
from typing import Dict, List, Optional

from intellotask.config import Settings, get_settings
from intellotask.models import Comment, Task, UNKNOWN_USER, User
from intellotask.storage.backends import StorageBackend, create_storage
from intellotask.storage.collection import CollectionStore
from intellotask.storage.comment_repository import CommentRepository
from intellotask.storage.seed import seed_collections
from intellotask.storage.task_repository import TaskRepository
from intellotask.storage.user_repository import UserRepository

logger = logging.getLogger(__name__)

USERS = "users"
TASKS = "tasks"
COMMENTS = "comments"


class DataService:
    """Entity-scoped CRUD over the three persisted collections."""

    def __init__(self, storage: StorageBackend, settings: Optional[Settings] = None):
        """
        Initialize DataService.

        Args:
            storage: Key-value backend holding the collections
            settings: Optional settings (key prefix, corruption policy)
        """
        self.storage = storage
        self.settings = settings or get_settings()
        lock = threading.RLock()
        reset = self.settings.reset_corrupt_collections

        self.users_store = CollectionStore(
            storage, self.settings.collection_key(USERS), User, reset_on_corrupt=reset, lock=lock
        )
        self.tasks_store = CollectionStore(
            storage, self.settings.collection_key(TASKS), Task, reset_on_corrupt=reset, lock=lock
        )
        self.comments_store = CollectionStore(
            storage, self.settings.collection_key(COMMENTS), Comment, reset_on_corrupt=reset, lock=lock
        )

        self.users = UserRepository(self.users_store)
        self.tasks = TaskRepository(self.tasks_store)
        self.comments = CommentRepository(self.comments_store)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DataService":
        """Build a DataService with the backend selected by settings."""
        settings = settings or get_settings()
        return cls(create_storage(settings), settings)

    def initialize(self) -> Dict[str, bool]:
        """Seed demo data into every collection whose key is missing."""
        return seed_collections(self.users_store, self.tasks_store, self.comments_store)

    # User methods
    def get_users(self) -> List[User]:
        return self.users.list()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.users.get_by_email(email)

    def resolve_user_name(self, user_id: str) -> str:
        """Display name for a user reference; dangling references read as 'Unknown User'."""
        user = self.users.get(user_id)
        return user.name if user else UNKNOWN_USER

    # Task methods
    def get_tasks(self) -> List[Task]:
        return self.tasks.list()

    def get_tasks_by_user_id(self, user_id: str) -> List[Task]:
        return self.tasks.list_for_user(user_id)

    # Comment methods
    def get_comments(self) -> List[Comment]:
        return self.comments.list()

    def get_comments_by_task_id(self, task_id: str) -> List[Comment]:
        return self.comments.list_for_task(task_id)
