"""Catalog service — categories and the paginated product filter."""

import re
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import MissingFieldError, StoreFailureError
from app.domain.models.category import Category
from app.domain.models.product import Product
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.catalog import ProductFilter

logger = structlog.get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Lenient query-string integer: reads the leading digits ("2.5" -> 2,
    "3abc" -> 3); anything unusable or non-positive falls back to default."""
    if value is None:
        return default
    match = LEADING_INT.match(str(value))
    if not match:
        return default
    number = int(match.group(1))
    return number if number > 0 else default


def build_product_filter(category_id: Optional[str], page: Optional[str], limit: Optional[str]) -> ProductFilter:
    if category_id is None or not str(category_id).strip():
        raise MissingFieldError("category_id is required", details={"missing": ["category_id"]})
    try:
        category = int(str(category_id).strip())
    except ValueError as e:
        raise MissingFieldError("category_id must be a number", details={"missing": ["category_id"]}) from e
    return ProductFilter(
        category_id=category,
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT),
    )


def list_categories(repo: CategoryRepository) -> List[Category]:
    try:
        return repo.list_all()
    except SQLAlchemyError as e:
        logger.error("Category query failed", error=str(e))
        raise StoreFailureError("Server error: " + str(e), details={"error": str(e)}) from e


def filter_products(repo: ProductRepository, filters: ProductFilter) -> List[Product]:
    """Active products of a category, cheapest first, one page at a time."""
    try:
        return repo.get_active_by_category(filters)
    except SQLAlchemyError as e:
        logger.error("Product filter failed", category_id=filters.category_id, error=str(e))
        raise StoreFailureError("Server error: " + str(e), details={"error": str(e)}) from e
