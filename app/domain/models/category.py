"""Category domain model — maps to the 'categories' table."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    image_url = Column(String(500), nullable=True)

    products = relationship("Product", back_populates="category")

    def __repr__(self):
        return f"<Category {self.category_id} - {self.name}>"
