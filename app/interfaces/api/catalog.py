"""Catalog API routes — categories and the product filter."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.application.services.catalog_service import (
    build_product_filter,
    filter_products,
    list_categories,
)
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.catalog import CategoryRead, ProductRead
from app.interfaces.deps import get_category_repository, get_product_repository

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/categories", response_model=List[CategoryRead])
def categories(repo: CategoryRepository = Depends(get_category_repository)):
    return list_categories(repo)


@router.get("/filter", response_model=List[ProductRead])
def filter_by_category(
    category_id: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    """Example: /api/filter?category_id=1&page=1&limit=10"""
    filters = build_product_filter(category_id, page, limit)
    return filter_products(repo, filters)
