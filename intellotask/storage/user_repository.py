"""
Repository for user operations.
"""
from typing import Optional

from intellotask.models import User
from intellotask.storage.repository import RecordRepository


class UserRepository(RecordRepository):
    """Repository for user records."""

    entity_name = "user"

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Get the first user with an exactly matching email.

        Emails are not enforced unique; the earliest stored match wins.
        """
        for user in self.store.read():
            if user.email == email:
                return user
        return None
