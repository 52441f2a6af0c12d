"""
Tests for the exception hierarchy and its JSON-friendly form.
"""
from intellotask.exceptions import CorruptStoreError, ServiceError, TaskNotFoundError


def test_not_found_to_dict():
    error = TaskNotFoundError("42")
    assert error.to_dict() == {
        "error_type": "TaskNotFoundError",
        "message": "Task with ID '42' not found",
        "context": {"resource_type": "Task", "resource_id": "42"},
    }


def test_to_dict_includes_original_error():
    cause = ValueError("Expecting value")
    error = CorruptStoreError("intellotask_tasks", reason="invalid JSON", original_error=cause)
    data = error.to_dict()
    assert data["context"] == {"key": "intellotask_tasks"}
    assert data["original_error"] == {"type": "ValueError", "message": "Expecting value"}


def test_plain_error_has_no_context():
    assert ServiceError("boom").to_dict() == {"error_type": "ServiceError", "message": "boom"}
