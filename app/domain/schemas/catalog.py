"""Pydantic schemas for Category and Product."""

from typing import Optional

from pydantic import BaseModel


class CategoryRead(BaseModel):
    category_id: int
    name: str
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductRead(BaseModel):
    product_id: int
    category_id: int
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class ProductFilter(BaseModel):
    category_id: int
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
