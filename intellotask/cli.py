#!/usr/bin/env python3
"""
Command-line interface for IntelloTask.
"""
import functools
import json
import sys
from typing import Any, Dict, Optional

import click

from intellotask import views
from intellotask.config import Settings, get_settings
from intellotask.data_service import DataService
from intellotask.exceptions import AuthenticationError, ServiceError
from intellotask.logging_config import configure_logging
from intellotask.models import Role, Task, TaskPriority, TaskStatus, User, UserStatus
from intellotask.services import AuthService, EmployeeService, ReportService, TaskService

STATUS_CHOICES = [s.value for s in TaskStatus]
PRIORITY_CHOICES = [p.value for p in TaskPriority]


def format_task(task: Task, assignee: str) -> str:
    """Format task for display."""
    lines = [
        f"Task {task.id}: {task.title}",
        f"  Status: {task.status.replace('-', ' ')}",
        f"  Priority: {task.priority}",
        f"  Assigned to: {assignee}",
        f"  Due: {task.due_date}",
    ]
    if task.description:
        lines.append(f"  Description: {task.description[:100]}")
    return "\n".join(lines)


def format_user(user: User, stats: Optional[Dict[str, int]] = None) -> str:
    """Format user for display."""
    line = f"{user.id}  {user.name} <{user.email}>  {user.role}  {user.department or 'Not assigned'}  {user.status}"
    if stats is not None:
        line += f"  {stats['completed']}/{stats['total']} completed"
    return line


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def fail(message: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Print an error and exit with status 1; details are printed as JSON instead."""
    if details is not None:
        click.echo(format_json(details))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def handle_errors(fn):
    """Render ServiceError as 'Error: <message>' and exit with status 1.

    Commands invoked with ``--format json`` get the error as a JSON object.
    """
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ServiceError as e:
            fail(e.message, e.to_dict() if kwargs.get('output_format') == 'json' else None)
    return wrapper


class AppContext:
    """Services shared by all commands of one invocation."""

    def __init__(self, settings: Settings, email: Optional[str], password: Optional[str]):
        self.settings = settings
        self.data = DataService.from_settings(settings)
        if settings.seed_demo_data:
            self.data.initialize()
        self.auth = AuthService(self.data)
        self.tasks = TaskService(self.data)
        self.employees = EmployeeService(self.data)
        self.reports = ReportService(self.data)
        self._email = email
        self._password = password

    def user(self) -> User:
        """Log in with the credentials given on the command line."""
        if not self._email or not self._password:
            raise AuthenticationError("Credentials required: pass --email and --password or set INTELLOTASK_EMAIL/INTELLOTASK_PASSWORD")
        return self.auth.login(self._email, self._password)


pass_app = click.make_pass_decorator(AppContext)


@click.group()
@click.option('--storage-path', envvar='INTELLOTASK_STORAGE_PATH', default=None,
              help='Directory holding the stored collections')
@click.option('--email', envvar='INTELLOTASK_EMAIL', default=None, help='Login email')
@click.option('--password', envvar='INTELLOTASK_PASSWORD', default=None, help='Login password')
@click.option('--verbose', is_flag=True, help='Log storage activity to stderr')
@click.pass_context
def cli(ctx, storage_path, email, password, verbose):
    """IntelloTask CLI tool for managing tasks and employees."""
    settings = Settings(storage_path=storage_path) if storage_path else get_settings()
    configure_logging(settings, level=None if verbose else "WARNING")
    try:
        ctx.obj = AppContext(settings, email, password)
    except ServiceError as e:
        fail(e.message)
    except OSError as e:
        fail(f"Cannot open storage at {settings.storage_path}: {e}")


@cli.command()
@pass_app
@handle_errors
def init(app):
    """Seed demo data into collections that do not exist yet."""
    seeded = app.data.initialize()
    for name, applied in seeded.items():
        click.echo(f"{name}: {'seeded' if applied else 'already present'}")


# ============================================================================
# Tasks
# ============================================================================

@cli.group()
def tasks():
    """Create, edit and list tasks."""


@tasks.command('list')
@click.option('--status', type=click.Choice(STATUS_CHOICES + ['all']), default='all', help='Filter by status')
@click.option('--priority', type=click.Choice(PRIORITY_CHOICES + ['all']), default='all', help='Filter by priority')
@click.option('--search', default=None, help='Search title and description')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json', 'kanban']),
              default='table', help='Output format')
@pass_app
@handle_errors
def list_tasks(app, status, priority, search, output_format):
    """List tasks visible to the logged-in user."""
    user = app.user()
    found = app.tasks.list_tasks(user, search=search, status=status, priority=priority)

    if output_format == 'json':
        click.echo(format_json([task.to_record() for task in found]))
        return

    if output_format == 'kanban':
        for name, column in views.group_by_status(found).items():
            click.echo(f"{name.replace('-', ' ')} ({len(column)})")
            for task in column:
                click.echo(f"  - {task.title} [{task.priority}] {app.tasks.assignee_name(task)}")
        return

    if not found:
        click.echo("No tasks found.")
        return
    for task in found:
        click.echo(format_task(task, app.tasks.assignee_name(task)))
        click.echo()


@tasks.command('create')
@click.option('--title', required=True, help='Task title')
@click.option('--description', required=True, help='Task description')
@click.option('--due-date', required=True, help='Due date (YYYY-MM-DD)')
@click.option('--priority', type=click.Choice(PRIORITY_CHOICES), default='medium', help='Priority')
@click.option('--status', type=click.Choice(STATUS_CHOICES), default='pending', help='Initial status')
@click.option('--assign-to', 'assigned_to', default=None, help='Assignee user ID (admins only)')
@pass_app
@handle_errors
def create_task(app, title, description, due_date, priority, status, assigned_to):
    """Create a task."""
    user = app.user()
    task = app.tasks.create_task(
        user,
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        status=status,
        assigned_to=assigned_to,
    )
    click.echo(f"Created task {task.id}: {task.title}")


@tasks.command('update')
@click.argument('task_id')
@click.option('--title', default=None)
@click.option('--description', default=None)
@click.option('--due-date', default=None)
@click.option('--priority', type=click.Choice(PRIORITY_CHOICES), default=None)
@click.option('--status', type=click.Choice(STATUS_CHOICES), default=None)
@click.option('--assign-to', 'assigned_to', default=None)
@pass_app
@handle_errors
def update_task(app, task_id, title, description, due_date, priority, status, assigned_to):
    """Update fields of a task."""
    user = app.user()
    task = app.tasks.update_task(
        user,
        task_id,
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        status=status,
        assigned_to=assigned_to,
    )
    click.echo(f"Updated task {task.id}: {task.title} ({task.status})")


@tasks.command('delete')
@click.argument('task_id')
@pass_app
@handle_errors
def delete_task(app, task_id):
    """Delete a task."""
    user = app.user()
    if app.tasks.delete_task(user, task_id):
        click.echo(f"Deleted task {task_id}")
    else:
        click.echo(f"Task {task_id} not found, nothing deleted")


@tasks.command('comment')
@click.argument('task_id')
@click.argument('content')
@pass_app
@handle_errors
def comment_task(app, task_id, content):
    """Add a comment to a task."""
    user = app.user()
    comment = app.tasks.add_comment(user, task_id, content)
    click.echo(f"Added comment {comment.id} to task {task_id}")


@tasks.command('comments')
@click.argument('task_id')
@pass_app
@handle_errors
def list_comments(app, task_id):
    """Show comments on a task."""
    app.user()
    comments = app.tasks.list_comments(task_id)
    if not comments:
        click.echo("No comments.")
        return
    for comment in comments:
        click.echo(f"[{comment.created_at}] {comment.user_name}: {comment.content}")


# ============================================================================
# Users
# ============================================================================

@cli.group()
def users():
    """Manage employees (admins only)."""


@users.command('list')
@click.option('--search', default=None, help='Search name and email')
@click.option('--department', default=None, help='Filter by department')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table')
@pass_app
@handle_errors
def list_users(app, search, department, output_format):
    """List users."""
    user = app.user()
    found = app.employees.list_employees(user, search=search, department=department)
    if output_format == 'json':
        records = []
        for u in found:
            record = u.to_record()
            record.pop("password", None)
            records.append(record)
        click.echo(format_json(records))
        return
    if not found:
        click.echo("No employees found.")
        return
    for u in found:
        click.echo(format_user(u, app.employees.task_stats(u.id)))


@users.command('add')
@click.option('--name', required=True)
@click.option('--email', 'user_email', required=True)
@click.option('--password', 'user_password', default=None, help='Initial password (default: temp123)')
@click.option('--role', type=click.Choice([r.value for r in Role]), default='employee')
@click.option('--department', default=None)
@click.option('--status', type=click.Choice([s.value for s in UserStatus]), default='active')
@pass_app
@handle_errors
def add_user(app, name, user_email, user_password, role, department, status):
    """Add an employee or admin."""
    user = app.user()
    created = app.employees.add_employee(
        user,
        name=name,
        email=user_email,
        password=user_password,
        role=role,
        department=department,
        status=status,
    )
    click.echo(f"Added user {created.id}: {created.name}")


@users.command('update')
@click.argument('user_id')
@click.option('--name', default=None)
@click.option('--email', 'user_email', default=None)
@click.option('--role', type=click.Choice([r.value for r in Role]), default=None)
@click.option('--department', default=None)
@click.option('--status', type=click.Choice([s.value for s in UserStatus]), default=None)
@pass_app
@handle_errors
def update_user(app, user_id, name, user_email, role, department, status):
    """Update a user."""
    user = app.user()
    updated = app.employees.update_employee(
        user,
        user_id,
        name=name,
        email=user_email,
        role=role,
        department=department,
        status=status,
    )
    click.echo(f"Updated user {updated.id}: {updated.name}")


@users.command('delete')
@click.argument('user_id')
@pass_app
@handle_errors
def delete_user(app, user_id):
    """Delete a user. Their tasks stay assigned to the deleted ID."""
    user = app.user()
    if app.employees.delete_employee(user, user_id):
        click.echo(f"Deleted user {user_id}")
    else:
        click.echo(f"User {user_id} not found, nothing deleted")


# ============================================================================
# Dashboard and reports
# ============================================================================

@cli.command()
@pass_app
@handle_errors
def dashboard(app):
    """Show dashboard counters and recent tasks."""
    user = app.user()
    data = app.reports.dashboard(user)
    click.echo(f"Welcome back, {user.name}!")
    for widget in data["widgets"]:
        click.echo(f"  {widget['title']}: {widget['value']}")
    click.echo()
    click.echo("Recent Tasks")
    if not data["recentTasks"]:
        click.echo("  No tasks assigned yet.")
    for entry in data["recentTasks"]:
        task = entry["task"]
        click.echo(f"  - {task.title} [{task.status}/{task.priority}] {entry['assignee']} due {task.due_date}")


@cli.group()
def report():
    """Reports and analytics."""


@report.command('show')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table')
@pass_app
@handle_errors
def show_report(app, output_format):
    """Show summary numbers and the completion trend."""
    user = app.user()
    summary = app.reports.summary(user)
    document = app.reports.build_report(user)
    if output_format == 'json':
        click.echo(format_json({"summary": summary, **document}))
        return

    click.echo(f"Total Tasks: {summary['totalTasks']}")
    click.echo(f"Completion Rate: {summary['completionRate']}%")
    click.echo(f"Active Employees: {summary['activeEmployees']}")
    click.echo(f"Avg. Tasks/Employee: {summary['avgTasksPerEmployee']}")
    if user.is_admin:
        click.echo()
        click.echo("Employee Workload")
        for row in document["workloadData"]:
            click.echo(f"  {row['name']}: {row['completed']} completed, {row['inProgress']} in progress, {row['pending']} pending")
    click.echo()
    click.echo("Completion Rate Trend (Last 6 Months)")
    for entry in document["completionRateData"]:
        click.echo(f"  {entry['month']}: {entry['completionRate']}% ({entry['completedTasks']}/{entry['totalTasks']})")


@report.command('export')
@click.option('--output-dir', default=None, help='Directory for the report file')
@pass_app
@handle_errors
def export_report(app, output_dir):
    """Write intellotask-report-<date>.json."""
    user = app.user()
    path = app.reports.export_report(user, output_dir or app.settings.report_directory)
    click.echo(f"Report written to {path}")


# ============================================================================
# Account settings
# ============================================================================

@cli.group()
def account():
    """Profile and password settings for the logged-in user."""


@account.command('profile')
@click.option('--name', default=None)
@click.option('--new-email', default=None)
@click.option('--department', default=None)
@pass_app
@handle_errors
def update_profile(app, name, new_email, department):
    """Update your profile."""
    app.user()
    app.auth.update_profile(name=name, email=new_email, department=department)
    click.echo("Profile updated successfully!")


@account.command('password')
@click.option('--current', 'current_password', prompt=True, hide_input=True)
@click.option('--new', 'new_password', prompt=True, hide_input=True)
@click.option('--confirm', 'confirm_password', prompt=True, hide_input=True)
@pass_app
@handle_errors
def change_password(app, current_password, new_password, confirm_password):
    """Change your password."""
    app.user()
    app.auth.change_password(current_password, new_password, confirm_password)
    click.echo("Password changed successfully!")


if __name__ == "__main__":
    cli()
