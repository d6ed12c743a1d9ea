"""Category endpoints. Reads are public; changes require a logged-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import error_responses, unwrap
from app.api.v1.auth import require_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.category import CategoryIn, CategoryOut
from app.schemas.common import MessageResponse
from app.services import categories as category_store


def list_categories(db: Annotated[Session, Depends(get_db)]) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in category_store.list_categories(db)]


def create_category(
    body: CategoryIn,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    category = unwrap(category_store.create_category(db, body))
    return MessageResponse(
        statusCode=status.HTTP_201_CREATED,
        message=f"Category '{category.name}' has been created.",
    )


def get_category(name: str, db: Annotated[Session, Depends(get_db)]) -> CategoryOut:
    return CategoryOut.model_validate(unwrap(category_store.get_category(db, name)))


def update_category(
    name: str,
    body: CategoryIn,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    unwrap(category_store.update_category(db, name, body))
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message=f"Category '{name}' has been successfully updated.",
    )


def delete_category(
    name: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    """Delete a category. Rejected with 409 while products still belong to it."""
    unwrap(category_store.delete_category(db, name))
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message=f"Category '{name}' has been deleted from database.",
    )


router = APIRouter()
router.add_api_route(
    "",
    list_categories,
    methods=["GET"],
    response_model=list[CategoryOut],
    summary="Returns all categories",
)
router.add_api_route(
    "",
    create_category,
    methods=["POST"],
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=error_responses(400, 401, 409),
    summary="Creates a new category",
)
router.add_api_route(
    "/{name}",
    get_category,
    methods=["GET"],
    response_model=CategoryOut,
    responses=error_responses(404),
    summary="Return a category by its name",
)
router.add_api_route(
    "/{name}",
    update_category,
    methods=["PUT"],
    response_model=MessageResponse,
    responses=error_responses(400, 401, 404, 409),
    summary="Updates an existing category",
)
router.add_api_route(
    "/{name}",
    delete_category,
    methods=["DELETE"],
    response_model=MessageResponse,
    responses=error_responses(401, 404, 409),
    summary="Deletes a category by its name",
)
