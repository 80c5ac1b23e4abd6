"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.product import Product
from app.domain.schemas.catalog import ProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_active_by_category(self, filters: ProductFilter) -> List[Product]:
        """Get one page of active products in a category, cheapest first."""
        ...
