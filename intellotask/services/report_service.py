"""
Report service - dashboard numbers and the downloadable report document.

Every call reads fresh user and task snapshots and recomputes the views;
nothing is cached between calls.
"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from intellotask import views
from intellotask.data_service import DataService
from intellotask.models import User

logger = logging.getLogger(__name__)

REPORT_PREFIX = "intellotask-report"


def _iso(now: datetime) -> str:
    return now.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class ReportService:
    """Service for reports and dashboard projections."""

    def __init__(self, data_service: DataService):
        """Initialize report service with data service dependency."""
        self.data = data_service

    def dashboard(self, user: User) -> Dict[str, Any]:
        """Widgets and recent tasks for the dashboard, scoped to the user's role."""
        tasks = self.data.get_tasks()
        users = self.data.get_users()
        return {
            "widgets": views.dashboard_widgets(tasks, users, user),
            "recentTasks": [
                {
                    "task": task,
                    "assignee": self.data.resolve_user_name(task.assigned_to),
                }
                for task in views.recent_tasks(tasks, user)
            ],
        }

    def summary(self, user: User) -> Dict[str, int]:
        return views.summary_stats(self.data.get_tasks(), self.data.get_users(), user)

    def priority_breakdown(self, user: User) -> Dict[str, int]:
        return views.priority_tally(views.role_scoped_tasks(self.data.get_tasks(), user))

    def build_report(self, user: User, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Assemble the export document.

        Args:
            user: User requesting the export
            now: Reference time for generatedAt and the completion trend

        Returns:
            Dictionary with generatedAt, user, workloadData, workStatusData,
            completionRateData, totalTasks and totalEmployees
        """
        now = now or datetime.now(timezone.utc)
        tasks = self.data.get_tasks()
        users = self.data.get_users()
        return {
            "generatedAt": _iso(now),
            "user": user.name,
            "workloadData": views.employee_workload(tasks, users),
            "workStatusData": views.work_status_data(tasks, user),
            "completionRateData": views.completion_rate_trend(tasks, now),
            "totalTasks": len(tasks),
            "totalEmployees": views.active_employee_count(users),
        }

    @staticmethod
    def report_filename(now: Optional[datetime] = None) -> str:
        """File name of the form intellotask-report-YYYY-MM-DD.json (UTC date)."""
        now = now or datetime.now(timezone.utc)
        return f"{REPORT_PREFIX}-{now.astimezone(timezone.utc).date().isoformat()}.json"

    def export_report(self, user: User, directory: str, now: Optional[datetime] = None) -> Path:
        """
        Write the report document as indented JSON.

        Args:
            user: User requesting the export
            directory: Target directory (created if missing)
            now: Reference time

        Returns:
            Path of the written file
        """
        now = now or datetime.now(timezone.utc)
        report = self.build_report(user, now)
        os.makedirs(directory, exist_ok=True)
        path = Path(directory) / self.report_filename(now)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        logger.info(f"Exported report for {user.id} to {path}")
        return path
