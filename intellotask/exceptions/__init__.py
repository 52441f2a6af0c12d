"""
Standard exceptions for the application.
"""
from intellotask.exceptions.errors import (
    ServiceError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    PermissionDeniedError,
    StorageError,
    CorruptStoreError,
    TaskNotFoundError,
    UserNotFoundError,
)

__all__ = [
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "StorageError",
    "CorruptStoreError",
    "TaskNotFoundError",
    "UserNotFoundError",
]
