"""
SQLAlchemy Implementation of Category Repository.
"""

from app.domain.models.category import Category
from app.domain.repositories.category_repository import CategoryRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category], CategoryRepository):
    """Category repository implementation using SQLAlchemy."""
