"""
API Dependencies.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.application.services.registration_ledger import PendingRegistrationLedger
from app.domain.models.category import Category
from app.domain.models.product import Product
from app.domain.models.user import User
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.database import get_db
from app.infrastructure.email_sender import NotificationSender
from app.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    """Get category repository instance."""
    return SQLAlchemyCategoryRepository(db, Category)


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_ledger(request: Request) -> PendingRegistrationLedger:
    """The process-wide ledger created in the application lifespan."""
    return request.app.state.ledger


def get_notification_sender(request: Request) -> NotificationSender:
    """The email sender created in the application lifespan."""
    return request.app.state.notification_sender
