"""
Employee service - business logic for user management.
All operations are restricted to admins.
"""
import logging
from typing import Any, Dict, List, Optional

from intellotask import views
from intellotask.data_service import DataService
from intellotask.exceptions import PermissionDeniedError, UserNotFoundError, ValidationError
from intellotask.models import Role, User, UserStatus, new_id, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "temp123"

EDITABLE_FIELDS = {"name", "email", "password", "role", "department", "status"}


def _require_admin(current_user: User, action: str) -> None:
    if not current_user.is_admin:
        raise PermissionDeniedError(action, current_user.role)


def _validate_role(role: str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(f"Invalid role: {role}. Must be one of: admin, employee", field="role", value=role)


def _validate_user_status(status: str) -> UserStatus:
    try:
        return UserStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid status: {status}. Must be one of: active, inactive", field="status", value=status)


class EmployeeService:
    """Service for employee management."""

    def __init__(self, data_service: DataService):
        """Initialize employee service with data service dependency."""
        self.data = data_service

    def add_employee(
        self,
        current_user: User,
        name: str,
        email: str,
        password: Optional[str] = None,
        role: str = Role.EMPLOYEE,
        department: Optional[str] = None,
        status: str = UserStatus.ACTIVE
    ) -> User:
        """
        Create a user.

        Args:
            current_user: Admin performing the action
            name: Display name
            email: Login email (uniqueness is not enforced)
            password: Initial password, defaults to 'temp123'
            role: admin or employee
            department: Optional department label
            status: active or inactive

        Returns:
            The stored user

        Raises:
            PermissionDeniedError: If current_user is not an admin
            ValidationError: If name/email is blank or role/status is invalid
        """
        _require_admin(current_user, "add employees")
        if not name or not name.strip():
            raise ValidationError("Name is required", field="name")
        if not email or not email.strip():
            raise ValidationError("Email is required", field="email")

        user = User(
            id=new_id(),
            name=name.strip(),
            email=email.strip(),
            password=password or DEFAULT_PASSWORD,
            role=_validate_role(role),
            department=department.strip() if department and department.strip() else None,
            status=_validate_user_status(status),
            created_at=utc_now_iso(),
        )
        self.data.users.add(user)
        return user

    def update_employee(self, current_user: User, user_id: str, **changes: Any) -> User:
        """
        Merge changes into a stored user.

        Raises:
            PermissionDeniedError: If current_user is not an admin
            UserNotFoundError: If the user does not exist
            ValidationError: If a field is unknown or invalid
        """
        _require_admin(current_user, "edit employees")
        user = self.data.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown user fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        cleaned: Dict[str, Any] = {}
        for field, value in changes.items():
            if value is None:
                continue
            if field == "role":
                cleaned[field] = _validate_role(value)
            elif field == "status":
                cleaned[field] = _validate_user_status(value)
            elif field == "department":
                cleaned[field] = value.strip() or None
            else:
                if not str(value).strip():
                    raise ValidationError(f"{field.capitalize()} cannot be empty", field=field)
                cleaned[field] = value.strip() if field != "password" else value

        updated = user.model_copy(update=cleaned)
        self.data.users.update(updated)
        return updated

    def delete_employee(self, current_user: User, user_id: str) -> bool:
        """
        Delete a user. Tasks assigned to them keep the now dangling reference.

        Returns:
            True if deleted, False if the user did not exist

        Raises:
            PermissionDeniedError: If current_user is not an admin
            ValidationError: If an admin tries to delete their own account
        """
        _require_admin(current_user, "delete employees")
        if user_id == current_user.id:
            raise ValidationError("You cannot delete your own account", field="user_id", value=user_id)
        deleted = self.data.users.delete(user_id)
        if deleted:
            orphaned = len(self.data.get_tasks_by_user_id(user_id))
            if orphaned:
                logger.info(f"User {user_id} deleted with {orphaned} tasks still assigned")
        return deleted

    def list_employees(
        self,
        current_user: User,
        search: Optional[str] = None,
        department: Optional[str] = None
    ) -> List[User]:
        _require_admin(current_user, "list employees")
        return views.filter_users(self.data.get_users(), search=search, department=department)

    def departments(self, current_user: User) -> List[str]:
        _require_admin(current_user, "list departments")
        return views.departments(self.data.get_users())

    def task_stats(self, user_id: str) -> Dict[str, int]:
        """Completed and total tasks assigned to a user."""
        return views.employee_task_stats(self.data.get_tasks(), user_id)
