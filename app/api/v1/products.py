"""Product endpoints. Reads are public; changes require a logged-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import error_responses, unwrap
from app.api.v1.auth import require_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.product import ProductIn, ProductOut
from app.services import products as product_store


def list_products(db: Annotated[Session, Depends(get_db)]) -> list[ProductOut]:
    return [ProductOut.model_validate(p) for p in product_store.list_products(db)]


def list_products_by_category(
    category: str, db: Annotated[Session, Depends(get_db)]
) -> list[ProductOut]:
    """All products of a category; 404 if the category is unknown or empty."""
    products = unwrap(product_store.list_products_by_category(db, category))
    return [ProductOut.model_validate(p) for p in products]


def get_product(product_id: int, db: Annotated[Session, Depends(get_db)]) -> ProductOut:
    return ProductOut.model_validate(unwrap(product_store.get_product(db, product_id)))


def create_product(
    body: ProductIn,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    product = unwrap(product_store.create_product(db, body))
    return MessageResponse(
        statusCode=status.HTTP_201_CREATED,
        message=f"Product '{product.name}' has been created with ID {product.id}.",
    )


def update_product(
    product_id: int,
    body: ProductIn,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    unwrap(product_store.update_product(db, product_id, body))
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message=f"Product with ID {product_id} has been successfully updated.",
    )


def delete_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_user)],
) -> MessageResponse:
    unwrap(product_store.delete_product(db, product_id))
    return MessageResponse(
        statusCode=status.HTTP_200_OK,
        message=f"Product with ID {product_id} has been successfully deleted.",
    )


router = APIRouter()
router.add_api_route(
    "",
    list_products,
    methods=["GET"],
    response_model=list[ProductOut],
    summary="Returns all products",
)
router.add_api_route(
    "",
    create_product,
    methods=["POST"],
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=error_responses(400, 401, 404, 409),
    summary="Creates a new product",
)
router.add_api_route(
    "/id/{product_id}",
    get_product,
    methods=["GET"],
    response_model=ProductOut,
    responses=error_responses(400, 404),
    summary="Return product by ID",
)
router.add_api_route(
    "/id/{product_id}",
    update_product,
    methods=["PUT"],
    response_model=MessageResponse,
    responses=error_responses(400, 401, 404, 409),
    summary="Updates an existing product",
)
router.add_api_route(
    "/id/{product_id}",
    delete_product,
    methods=["DELETE"],
    response_model=MessageResponse,
    responses=error_responses(400, 401, 404),
    summary="Deletes a product by its ID",
)
router.add_api_route(
    "/{category}",
    list_products_by_category,
    methods=["GET"],
    response_model=list[ProductOut],
    responses=error_responses(404),
    summary="Return all products from a specified category",
)
