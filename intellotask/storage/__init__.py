"""
Storage layer.
Provides key-value backends, whole-collection snapshots and per-record repositories.
"""
from .backends import StorageBackend, MemoryStorage, FileStorage, create_storage
from .collection import CollectionStore
from .user_repository import UserRepository
from .task_repository import TaskRepository
from .comment_repository import CommentRepository

__all__ = [
    'StorageBackend',
    'MemoryStorage',
    'FileStorage',
    'create_storage',
    'CollectionStore',
    'UserRepository',
    'TaskRepository',
    'CommentRepository',
]
