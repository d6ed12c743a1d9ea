"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserListItem,
    UsersListResponse,
)
from app.schemas.category import CategoryIn, CategoryOut
from app.schemas.common import MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.product import ProductIn, ProductOut

__all__ = [
    "CategoryIn",
    "CategoryOut",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProductIn",
    "ProductOut",
    "RegisterRequest",
    "UserListItem",
    "UsersListResponse",
]
