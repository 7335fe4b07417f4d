"""SQLAlchemy ORM models."""

from storefront.models.account import Account
from storefront.models.base import Base
from storefront.models.product import Product

__all__ = ["Account", "Base", "Product"]
