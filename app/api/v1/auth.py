"""Register/login/logout endpoints and the auth dependencies (require_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.api.errors import error_responses, unwrap
from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.models import Role
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserListItem,
    UsersListResponse,
)
from app.schemas.common import MessageResponse
from app.services import auth as auth_service
from app.services import users as user_store

AUTH_REQUIRED = "Authentication required. Please login first to access this endpoint."


def require_user(request: Request) -> CurrentUser:
    """Dependency: run the auth guard; 401 if it rejects the request."""
    if not request.app.state.auth_guard.can_activate(request):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTH_REQUIRED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return request.state.user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(require_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != Role.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _set_auth_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )


def register(
    body: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Create an account and log it in (sets the access_token cookie)."""
    user = unwrap(auth_service.register_user(db, settings, body.username, body.password))
    _set_auth_cookie(response, settings, auth_service.issue_token(settings, user))
    return MessageResponse(
        statusCode=status.HTTP_201_CREATED,
        message="User registered and logged in successfully. "
        "You can now access authenticated endpoints.",
    )


def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """
    Authenticate with username and password; sets the access_token cookie.
    The same token is also accepted as `Authorization: Bearer <token>`.
    """
    token = unwrap(auth_service.login(db, settings, body.username, body.password))
    _set_auth_cookie(response, settings, token)
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message="User successfully logged in. You can now access authenticated endpoints.",
    )


def me(current_user: Annotated[CurrentUser, Depends(require_user)]) -> CurrentUser:
    """Identity decoded from the caller's access token."""
    return current_user


def logout(
    request: Request,
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Clear the access_token cookie. 200 if there was none, 202 otherwise."""
    if not request.cookies.get(settings.AUTH_COOKIE_NAME):
        return MessageResponse(
            statusCode=status.HTTP_200_OK,
            message="There is no user logged in. Already logged out.",
        )
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )
    response.status_code = status.HTTP_202_ACCEPTED
    return MessageResponse(
        statusCode=status.HTTP_202_ACCEPTED,
        message="User has been logged out. "
        "Please login again to access authenticated endpoints.",
    )


def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in user_store.list_users(db)]
    )


def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user account (admin only)."""
    unwrap(user_store.delete_user(db, user_id))
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message=f"User with ID {user_id} has been deleted.",
    )


router = APIRouter()
router.add_api_route(
    "/register",
    register,
    methods=["POST"],
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=error_responses(400, 409),
)
router.add_api_route(
    "/login",
    login,
    methods=["POST"],
    response_model=MessageResponse,
    responses=error_responses(400, 401, 404),
)
router.add_api_route(
    "/me", me, methods=["GET"], response_model=CurrentUser, responses=error_responses(401)
)
router.add_api_route(
    "/logout",
    logout,
    methods=["POST"],
    response_model=MessageResponse,
    responses={202: {"model": MessageResponse, "description": "Logged out"}},
)
router.add_api_route(
    "/users",
    list_users,
    methods=["GET"],
    response_model=UsersListResponse,
    responses=error_responses(401, 403),
)
router.add_api_route(
    "/users/{user_id}",
    delete_user,
    methods=["DELETE"],
    response_model=MessageResponse,
    responses=error_responses(401, 403, 404),
)
