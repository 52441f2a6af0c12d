"""
Tests for domain records and their persisted representation.
"""
from datetime import timezone

import pytest
from pydantic import ValidationError as ModelValidationError

from intellotask.models import (
    Comment,
    Role,
    Task,
    TaskStatus,
    User,
    new_id,
    parse_timestamp,
    utc_now_iso,
)
from tests.conftest import make_task, make_user


def test_task_serializes_with_camel_case_keys():
    task = make_task(task_id="t1", status=TaskStatus.IN_PROGRESS)
    record = task.to_record()
    assert record["id"] == "t1"
    assert record["assignedTo"] == "2"
    assert record["assignedBy"] == "1"
    assert record["dueDate"] == "2026-02-01"
    assert record["status"] == "in-progress"
    assert "createdAt" in record and "updatedAt" in record
    assert "assigned_to" not in record


def test_optional_fields_are_omitted_when_unset():
    record = make_task().to_record()
    assert "attachments" not in record
    assert "comments" not in record

    user_record = make_user(department=None).to_record()
    assert "department" not in user_record


def test_records_load_from_camel_case_data():
    user = User.model_validate({
        "id": "9",
        "name": "Jane",
        "email": "jane@example.com",
        "password": "pw",
        "role": "admin",
        "status": "inactive",
        "createdAt": "2026-01-01T00:00:00.000Z",
    })
    assert user.role == Role.ADMIN
    assert user.is_admin
    assert not user.is_active_employee
    assert user.created_at == "2026-01-01T00:00:00.000Z"


def test_embedded_comments_round_trip():
    comment = Comment(id="c1", task_id="t1", user_id="2", user_name="John", content="hi")
    task = make_task(task_id="t1").model_copy(update={"comments": [comment], "attachments": ["a.pdf"]})
    loaded = Task.model_validate(task.to_record())
    assert loaded.comments[0].user_name == "John"
    assert loaded.attachments == ["a.pdf"]


def test_invalid_status_is_rejected():
    with pytest.raises(ModelValidationError):
        Task.model_validate({**make_task().to_record(), "status": "done"})


def test_new_id_is_unique_under_rapid_creation():
    ids = {new_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_timestamps_are_utc_with_z_suffix():
    stamp = utc_now_iso()
    assert stamp.endswith("Z")
    parsed = parse_timestamp(stamp)
    assert parsed.tzinfo is not None
    assert parsed.utcoffset() == timezone.utc.utcoffset(None)
