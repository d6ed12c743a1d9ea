"""SQLAlchemy ORM models."""

from app.models.base import MAX_INTEGER_ID, Base
from app.models.category import Category
from app.models.product import Product
from app.models.user import Role, User

__all__ = ["MAX_INTEGER_ID", "Base", "Category", "Product", "Role", "User"]
