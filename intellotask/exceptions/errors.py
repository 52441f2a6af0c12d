"""
Standard Exception Hierarchy for IntelloTask

This module provides a standardized exception hierarchy for consistent error handling
across the intellotask package. All exceptions inherit from ServiceError and can be
converted to a plain dictionary (for JSON output) or rendered by the CLI.

Repository lookups never raise for missing records; they return None/False.
Services raise NotFoundError subclasses when a user action targets a missing record.
"""
from typing import Any


# ============================================================================
# Base Exception Class
# ============================================================================

class ServiceError(Exception):
    """Base exception for all IntelloTask errors.

    Attributes:
        message: Human-readable error message
        context: Dictionary of additional context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        """Initialize service error.

        Args:
            message: Human-readable error message
            context: Optional dictionary of additional context
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error)
            }
        return result


# ============================================================================
# Common Exception Types
# ============================================================================

class NotFoundError(ServiceError):
    """Raised when a requested record is not found.

    Attributes:
        resource_type: Type of record (e.g., "Task", "User")
        resource_id: ID of the record that was not found
    """

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        *,
        message: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"{resource_type} with ID '{resource_id}' not found"

        super().__init__(message, context=context)
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        self.context.setdefault("resource_type", resource_type)
        self.context.setdefault("resource_id", str(resource_id))


class ValidationError(ServiceError):
    """Raised when input validation fails.

    Attributes:
        field: Optional field name that failed validation
        value: Optional value that failed validation
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, context=context)
        self.field = field
        self.value = value
        if field is not None:
            self.context.setdefault("field", field)
        if value is not None:
            self.context.setdefault("value", str(value))


class AuthenticationError(ServiceError):
    """Raised when credentials are rejected or no user is logged in."""


class PermissionDeniedError(ServiceError):
    """Raised when the current user's role does not allow an action.

    Attributes:
        action: The action that was refused
        role: Role of the user that attempted it
    """

    def __init__(
        self,
        action: str,
        role: str,
        *,
        message: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"Role '{role}' is not allowed to {action}"

        super().__init__(message, context=context)
        self.action = action
        self.role = role
        self.context.setdefault("action", action)
        self.context.setdefault("role", role)


class StorageError(ServiceError):
    """Raised when the storage substrate cannot be read or written.

    Attributes:
        key: Storage key involved in the failure
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, context=context, original_error=original_error)
        self.key = key
        if key is not None:
            self.context.setdefault("key", key)


class CorruptStoreError(StorageError):
    """Raised when a stored collection is not a valid serialized array of records."""

    def __init__(self, key: str, *, reason: str | None = None, **kwargs):
        message = f"Stored collection '{key}' is corrupt"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, key=key, **kwargs)


# ============================================================================
# Record-Specific Exceptions
# ============================================================================

class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, task_id: str, **kwargs):
        super().__init__("Task", task_id, **kwargs)
        self.task_id = task_id


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id: str, **kwargs):
        super().__init__("User", user_id, **kwargs)
        self.user_id = user_id


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
