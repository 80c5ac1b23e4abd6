"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Optional

from sqlalchemy import or_

from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_credentials(self, username: str, password: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.username == username, User.password == password)
            .first()
        )

    def exists_username_or_email(self, username: str, email: Optional[str]) -> bool:
        conditions = [User.username == username]
        if email:
            conditions.append(User.email == email)
        return self.db.query(User.id).filter(or_(*conditions)).first() is not None
