"""
Category Repository Interface.
"""

from app.domain.repositories.base import BaseRepository
from app.domain.models.category import Category


class CategoryRepository(BaseRepository[Category]):
    """Interface for Category-specific operations."""
