"""
Service layer - business logic separated from the presentation surface.
"""
from intellotask.services.auth_service import AuthService
from intellotask.services.employee_service import EmployeeService
from intellotask.services.report_service import ReportService
from intellotask.services.task_service import TaskService

__all__ = ["AuthService", "EmployeeService", "ReportService", "TaskService"]
