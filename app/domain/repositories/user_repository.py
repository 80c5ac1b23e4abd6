"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_credentials(self, username: str, password: str) -> Optional[User]:
        """Get the user whose username and password both match exactly."""
        ...

    def exists_username_or_email(self, username: str, email: Optional[str]) -> bool:
        """True if any user already owns this username or this email."""
        ...
