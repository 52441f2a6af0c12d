"""
Auth service - login session and account settings.

Credentials are compared as plaintext against the stored user records, which
is how existing data is laid out. Anything beyond local demo use needs hashed
passwords.
"""
import logging
from typing import Optional

from intellotask.data_service import DataService
from intellotask.exceptions import AuthenticationError, ValidationError
from intellotask.models import User

logger = logging.getLogger(__name__)


class AuthService:
    """Holds the current session for one DataService."""

    def __init__(self, data_service: DataService):
        """Initialize auth service with data service dependency."""
        self.data = data_service
        self._user_id: Optional[str] = None

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check credentials and start a session on success.

        Returns:
            The matching user, or None if no user has this email/password pair
        """
        for user in self.data.get_users():
            if user.email == email and user.password == password:
                self._user_id = user.id
                logger.info(f"User {user.id} logged in")
                return user
        logger.info(f"Failed login for {email}")
        return None

    def login(self, email: str, password: str) -> User:
        """Like authenticate, but raises AuthenticationError on failure."""
        user = self.authenticate(email, password)
        if user is None:
            raise AuthenticationError("Invalid email or password")
        return user

    def logout(self) -> None:
        self._user_id = None

    def current_user(self) -> Optional[User]:
        """The logged-in user, re-read from storage. A deleted user ends the session."""
        if self._user_id is None:
            return None
        user = self.data.get_user_by_id(self._user_id)
        if user is None:
            self._user_id = None
        return user

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def require_user(self) -> User:
        user = self.current_user()
        if user is None:
            raise AuthenticationError("Not logged in")
        return user

    def update_profile(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None
    ) -> User:
        """
        Update the current user's profile fields.

        Raises:
            AuthenticationError: If nobody is logged in
            ValidationError: If name or email is given but blank
        """
        user = self.require_user()
        changes = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty", field="name")
            changes["name"] = name.strip()
        if email is not None:
            if not email.strip():
                raise ValidationError("Email cannot be empty", field="email")
            changes["email"] = email.strip()
        if department is not None:
            changes["department"] = department.strip() or None

        updated = user.model_copy(update=changes)
        self.data.users.update(updated)
        return updated

    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> User:
        """
        Change the current user's password.

        Raises:
            ValidationError: If the confirmation does not match or the current
                password is wrong
        """
        user = self.require_user()
        if new_password != confirm_password:
            raise ValidationError("New passwords do not match!", field="confirm_password")
        if user.password != current_password:
            raise ValidationError("Current password is incorrect!", field="current_password")
        if not new_password:
            raise ValidationError("New password cannot be empty", field="new_password")

        updated = user.model_copy(update={"password": new_password})
        self.data.users.update(updated)
        logger.info(f"Password changed for user {user.id}")
        return updated
