"""
Read-only projections over user and task snapshots.

Everything here is a pure function of the lists passed in: no storage access,
no caching. Callers read fresh snapshots from DataService and recompute.
"""
import calendar
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from intellotask.models import Task, TaskPriority, TaskStatus, User, parse_timestamp

STATUS_ORDER = [TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED]

STATUS_SLICES = [
    (TaskStatus.COMPLETED, "Completed", "#10B981"),
    (TaskStatus.IN_PROGRESS, "In Progress", "#3B82F6"),
    (TaskStatus.PENDING, "Pending", "#F59E0B"),
]

TREND_MONTHS = 6


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Rounded percentage, 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def role_scoped_tasks(tasks: List[Task], user: User) -> List[Task]:
    """Admins see every task; employees only tasks assigned to them."""
    if user.is_admin:
        return list(tasks)
    return [task for task in tasks if task.assigned_to == user.id]


def status_tally(tasks: List[Task]) -> Dict[str, int]:
    tally = {str(status): 0 for status in (TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, TaskStatus.PENDING)}
    for task in tasks:
        if task.status in tally:
            tally[task.status] += 1
    return tally


def priority_tally(tasks: List[Task]) -> Dict[str, int]:
    tally = {str(priority): 0 for priority in (TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW)}
    for task in tasks:
        if task.priority in tally:
            tally[task.priority] += 1
    return tally


def active_employees(users: List[User]) -> List[User]:
    return [user for user in users if user.is_active_employee]


def active_employee_count(users: List[User]) -> int:
    return len(active_employees(users))


def employee_task_stats(tasks: List[Task], user_id: str) -> Dict[str, int]:
    """Completed and total task counts for one assignee."""
    own = [task for task in tasks if task.assigned_to == user_id]
    completed = sum(1 for task in own if task.status == TaskStatus.COMPLETED)
    return {"completed": completed, "total": len(own)}


def employee_workload(tasks: List[Task], users: List[User]) -> List[Dict[str, Any]]:
    """Per active employee status breakdown, in user order (stacked bar chart rows)."""
    rows = []
    for employee in active_employees(users):
        own = [task for task in tasks if task.assigned_to == employee.id]
        tally = status_tally(own)
        rows.append({
            "name": employee.name,
            "completed": tally[TaskStatus.COMPLETED],
            "inProgress": tally[TaskStatus.IN_PROGRESS],
            "pending": tally[TaskStatus.PENDING],
            "total": len(own),
        })
    return rows


def work_status_data(tasks: List[Task], user: User) -> List[Dict[str, Any]]:
    """Role-scoped status distribution as pie chart slices."""
    tally = status_tally(role_scoped_tasks(tasks, user))
    return [
        {"name": label, "value": tally[status], "color": color}
        for status, label, color in STATUS_SLICES
    ]


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _created_month(task: Task, now: datetime) -> Optional[Tuple[int, int]]:
    try:
        created = parse_timestamp(task.created_at)
    except ValueError:
        return None
    if created.tzinfo is not None and now.tzinfo is not None:
        created = created.astimezone(now.tzinfo)
    return created.year, created.month


def completion_rate_trend(tasks: List[Task], now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """
    Completion rate of tasks created in each of the trailing six calendar months.

    Months are matched on calendar year and month of createdAt, not a rolling
    window. The result always has six entries, oldest first, ending with the
    month of ``now``. A month with no tasks reports a rate of 0.

    Args:
        tasks: Task snapshot
        now: Reference time (defaults to the current UTC time)

    Returns:
        List of {month, completionRate, totalTasks, completedTasks}
    """
    now = now or datetime.now(timezone.utc)

    buckets: Dict[Tuple[int, int], List[Task]] = {}
    for task in tasks:
        key = _created_month(task, now)
        if key is not None:
            buckets.setdefault(key, []).append(task)

    trend = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        month_tasks = buckets.get((year, month), [])
        completed = sum(1 for task in month_tasks if task.status == TaskStatus.COMPLETED)
        trend.append({
            "month": f"{calendar.month_abbr[month]} {year}",
            "completionRate": percentage(completed, len(month_tasks)),
            "totalTasks": len(month_tasks),
            "completedTasks": completed,
        })
    return trend


def summary_stats(tasks: List[Task], users: List[User], user: User) -> Dict[str, int]:
    """Headline numbers for the reports page."""
    scoped = role_scoped_tasks(tasks, user)
    completed = sum(1 for task in scoped if task.status == TaskStatus.COMPLETED)
    employees = active_employee_count(users)
    return {
        "totalTasks": len(scoped),
        "completedTasks": completed,
        "completionRate": percentage(completed, len(scoped)),
        "activeEmployees": employees,
        "avgTasksPerEmployee": round_half_up(len(scoped) / employees) if employees else 0,
    }


def dashboard_widgets(tasks: List[Task], users: List[User], user: User) -> List[Dict[str, Any]]:
    """Dashboard counters; the active employee counter is shown to admins only."""
    tally = status_tally(role_scoped_tasks(tasks, user))
    widgets = [
        {"title": "Completed Tasks", "value": tally[TaskStatus.COMPLETED]},
        {"title": "In Progress", "value": tally[TaskStatus.IN_PROGRESS]},
        {"title": "Pending Tasks", "value": tally[TaskStatus.PENDING]},
    ]
    if user.is_admin:
        widgets.append({"title": "Active Employees", "value": active_employee_count(users)})
    return widgets


def recent_tasks(tasks: List[Task], user: User, limit: int = 5) -> List[Task]:
    return role_scoped_tasks(tasks, user)[:limit]


def filter_tasks(
    tasks: List[Task],
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None
) -> List[Task]:
    """
    Narrow a task list for display.

    Args:
        search: Case-insensitive substring matched against title or description
        status: Exact status, or None/"all" for any
        priority: Exact priority, or None/"all" for any
    """
    result = list(tasks)
    if search:
        needle = search.lower()
        result = [
            task for task in result
            if needle in task.title.lower() or needle in task.description.lower()
        ]
    if status and status != "all":
        result = [task for task in result if task.status == status]
    if priority and priority != "all":
        result = [task for task in result if task.priority == priority]
    return result


def group_by_status(tasks: List[Task]) -> Dict[str, List[Task]]:
    """Kanban columns keyed pending, in-progress, completed."""
    columns: Dict[str, List[Task]] = {str(status): [] for status in STATUS_ORDER}
    for task in tasks:
        if task.status in columns:
            columns[task.status].append(task)
    return columns


def filter_users(
    users: List[User],
    search: Optional[str] = None,
    department: Optional[str] = None
) -> List[User]:
    result = list(users)
    if search:
        needle = search.lower()
        result = [
            user for user in result
            if needle in user.name.lower() or needle in user.email.lower()
        ]
    if department and department != "all":
        result = [user for user in result if user.department == department]
    return result


def departments(users: List[User]) -> List[str]:
    """Distinct non-empty department labels in first-seen order."""
    seen: List[str] = []
    for user in users:
        if user.department and user.department not in seen:
            seen.append(user.department)
    return seen
