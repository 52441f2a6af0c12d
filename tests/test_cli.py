"""
Tests for CLI tool.
"""
import json
import os

import pytest
from click.testing import CliRunner

from intellotask.cli import cli


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def storage_dir(tmp_path):
    return str(tmp_path / "data")


@pytest.fixture
def as_admin(storage_dir):
    return ["--storage-path", storage_dir, "--email", "admin@intellotask.com", "--password", "admin123"]


@pytest.fixture
def as_john(storage_dir):
    return ["--storage-path", storage_dir, "--email", "john@intellotask.com", "--password", "emp123"]


def test_init_seeds_storage(runner, storage_dir):
    result = runner.invoke(cli, ["--storage-path", storage_dir, "init"])
    assert result.exit_code == 0
    assert "already present" in result.output
    assert os.path.exists(os.path.join(storage_dir, "intellotask_users.json"))


def test_init_seeds_when_automatic_seeding_is_off(runner, storage_dir):
    env = {"INTELLOTASK_SEED_DEMO_DATA": "false"}
    result = runner.invoke(cli, ["--storage-path", storage_dir, "init"], env=env)
    assert result.exit_code == 0
    assert "users: seeded" in result.output
    assert "tasks: seeded" in result.output
    assert "comments: seeded" in result.output

    result = runner.invoke(cli, ["--storage-path", storage_dir, "init"], env=env)
    assert "users: already present" in result.output


def test_unusable_storage_path(runner, tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x")
    result = runner.invoke(cli, ["--storage-path", str(blocker), "init"])
    assert result.exit_code == 1
    assert "Error: Cannot open storage" in result.output


def test_json_format_reports_errors_as_json(runner, storage_dir):
    result = runner.invoke(cli, ["--storage-path", storage_dir, "tasks", "list", "--format", "json"])
    assert result.exit_code == 1
    error = json.loads(result.stdout)
    assert error["error_type"] == "AuthenticationError"
    assert error["message"].startswith("Credentials required")


def test_list_tasks_requires_credentials(runner, storage_dir):
    result = runner.invoke(cli, ["--storage-path", storage_dir, "tasks", "list"])
    assert result.exit_code == 1
    assert "Credentials required" in result.output


def test_bad_credentials(runner, storage_dir):
    result = runner.invoke(cli, [
        "--storage-path", storage_dir, "--email", "admin@intellotask.com", "--password", "x", "tasks", "list",
    ])
    assert result.exit_code == 1
    assert "Invalid email or password" in result.output


def test_admin_lists_all_tasks(runner, as_admin):
    result = runner.invoke(cli, as_admin + ["tasks", "list"])
    assert result.exit_code == 0
    assert "Website Redesign" in result.output
    assert "Mobile App Testing" in result.output
    assert "Sarah Johnson" in result.output


def test_employee_lists_own_tasks_json(runner, as_john):
    result = runner.invoke(cli, as_john + ["tasks", "list", "--format", "json"])
    assert result.exit_code == 0
    tasks = json.loads(result.output)
    assert {t["id"] for t in tasks} == {"1", "3"}
    assert all(t["assignedTo"] == "2" for t in tasks)


def test_kanban_output(runner, as_john):
    result = runner.invoke(cli, as_john + ["tasks", "list", "--format", "kanban"])
    assert result.exit_code == 0
    assert "pending (0)" in result.output
    assert "in progress (1)" in result.output


def test_create_update_delete_task(runner, as_admin, as_john):
    result = runner.invoke(cli, as_admin + [
        "tasks", "create",
        "--title", "Write docs",
        "--description", "User guide",
        "--due-date", "2026-11-01",
        "--assign-to", "2",
    ])
    assert result.exit_code == 0
    task_id = result.output.split("Created task ")[1].split(":")[0]

    result = runner.invoke(cli, as_john + ["tasks", "update", task_id, "--status", "completed"])
    assert result.exit_code == 0
    assert "(completed)" in result.output

    result = runner.invoke(cli, as_admin + ["tasks", "delete", task_id])
    assert result.exit_code == 0
    assert f"Deleted task {task_id}" in result.output

    result = runner.invoke(cli, as_admin + ["tasks", "delete", task_id])
    assert result.exit_code == 0
    assert "nothing deleted" in result.output


def test_create_task_invalid_date(runner, as_admin):
    result = runner.invoke(cli, as_admin + [
        "tasks", "create", "--title", "T", "--description", "D", "--due-date", "soon", "--assign-to", "2",
    ])
    assert result.exit_code == 1
    assert "Invalid due date" in result.output


def test_update_missing_task(runner, as_admin):
    result = runner.invoke(cli, as_admin + ["tasks", "update", "nope", "--status", "completed"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_comments(runner, as_john):
    result = runner.invoke(cli, as_john + ["tasks", "comment", "1", "Halfway there"])
    assert result.exit_code == 0
    result = runner.invoke(cli, as_john + ["tasks", "comments", "1"])
    assert "John Smith: Halfway there" in result.output


def test_users_admin_only(runner, as_john):
    result = runner.invoke(cli, as_john + ["users", "list"])
    assert result.exit_code == 1
    assert "not allowed" in result.output


def test_users_add_and_list_json_hides_passwords(runner, as_admin):
    result = runner.invoke(cli, as_admin + [
        "users", "add", "--name", "Mia Park", "--email", "mia@intellotask.com", "--department", "QA",
    ])
    assert result.exit_code == 0

    result = runner.invoke(cli, as_admin + ["users", "list", "--format", "json"])
    users = json.loads(result.output)
    assert "Mia Park" in [u["name"] for u in users]
    assert all("password" not in u for u in users)


def test_delete_user_leaves_unknown_assignee(runner, as_admin):
    result = runner.invoke(cli, as_admin + ["users", "delete", "3"])
    assert result.exit_code == 0
    result = runner.invoke(cli, as_admin + ["tasks", "list"])
    assert "Unknown User" in result.output


def test_dashboard(runner, as_admin):
    result = runner.invoke(cli, as_admin + ["dashboard"])
    assert result.exit_code == 0
    assert "Welcome back, Admin User!" in result.output
    assert "Active Employees: 2" in result.output


def test_report_show_and_export(runner, as_admin, tmp_path):
    result = runner.invoke(cli, as_admin + ["report", "show"])
    assert result.exit_code == 0
    assert "Total Tasks: 3" in result.output
    assert "Completion Rate: 33%" in result.output

    out_dir = tmp_path / "reports"
    result = runner.invoke(cli, as_admin + ["report", "export", "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    files = os.listdir(out_dir)
    assert len(files) == 1
    assert files[0].startswith("intellotask-report-")


def test_change_password_mismatch(runner, as_john):
    result = runner.invoke(cli, as_john + [
        "account", "password", "--current", "emp123", "--new", "a", "--confirm", "b",
    ])
    assert result.exit_code == 1
    assert "New passwords do not match!" in result.output


def test_change_password(runner, as_john, storage_dir):
    result = runner.invoke(cli, as_john + [
        "account", "password", "--current", "emp123", "--new", "fresh", "--confirm", "fresh",
    ])
    assert result.exit_code == 0
    assert "Password changed successfully!" in result.output

    result = runner.invoke(cli, [
        "--storage-path", storage_dir, "--email", "john@intellotask.com", "--password", "fresh", "dashboard",
    ])
    assert result.exit_code == 0
