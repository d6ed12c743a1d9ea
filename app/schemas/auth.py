"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Username",
        examples=["catalog_user"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
        examples=["catalog_password"],
    )


class RegisterRequest(BaseModel):
    """Credentials for a new account."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Username",
        examples=["my_user"],
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters)",
        examples=["my_secret_password"],
    )


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) decoded from the access token."""

    id: int
    username: str
    role: str


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]
