"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import List

from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.catalog import ProductFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def get_active_by_category(self, filters: ProductFilter) -> List[Product]:
        """Active products of one category -> price ascending -> paginated."""
        return (
            self.db.query(Product)
            .filter(Product.category_id == filters.category_id)
            .filter(Product.is_active.is_(True))
            .order_by(Product.price.asc(), Product.product_id.asc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )
