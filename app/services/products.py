"""Product store: CRUD over products and price normalization."""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.result import Err, ErrorKind, Ok, Result
from app.models import MAX_INTEGER_ID, Category, Product
from app.schemas.product import ProductIn
from app.services.categories import get_category

logger = logging.getLogger(__name__)

# Bounds follow the Numeric(10, 2) column.
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")

INVALID_PRICE = "Invalid price. Please provide a valid non-negative number."
INVALID_PRODUCT_ID = "Invalid product ID. Please enter a valid product ID."
PRODUCT_EXISTS = "Product named {name} with these characteristics already exists in the database."
PRODUCT_NOT_FOUND = "Product with ID '{product_id}' not found."
NO_PRODUCTS_FOR_CATEGORY = "Products for the category '{name}' not found."


def normalize_price(value: Any) -> Result[Decimal]:
    """Round to two decimal places (half up). VALIDATION if not a finite, non-negative amount."""
    if isinstance(value, bool):
        return Err(ErrorKind.VALIDATION, INVALID_PRICE)
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return Err(ErrorKind.VALIDATION, INVALID_PRICE)
    if not price.is_finite() or price < 0 or price > MAX_PRICE + PRICE_QUANTUM:
        return Err(ErrorKind.VALIDATION, INVALID_PRICE)
    price = price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    if price > MAX_PRICE:
        return Err(ErrorKind.VALIDATION, INVALID_PRICE)
    return Ok(price)


def list_products(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id).all()


def list_products_by_category(db: Session, category_name: str) -> Result[list[Product]]:
    """NOT_FOUND if the category does not exist or has no products."""
    found = get_category(db, category_name)
    if isinstance(found, Err):
        return found
    products = (
        db.query(Product)
        .filter(Product.category_id == found.value.id)
        .order_by(Product.id)
        .all()
    )
    if not products:
        return Err(ErrorKind.NOT_FOUND, NO_PRODUCTS_FOR_CATEGORY.format(name=category_name))
    return Ok(products)


def get_product(db: Session, product_id: int) -> Result[Product]:
    if product_id <= 0:
        return Err(ErrorKind.VALIDATION, INVALID_PRODUCT_ID)
    # Ids past the column range cannot exist and would overflow the driver
    product = db.get(Product, product_id) if product_id <= MAX_INTEGER_ID else None
    if product is None:
        return Err(ErrorKind.NOT_FOUND, PRODUCT_NOT_FOUND.format(product_id=product_id))
    return Ok(product)


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    query = db.query(Product.id).filter(Product.name == name)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, product: Product) -> Result[Product]:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Err(ErrorKind.CONFLICT, PRODUCT_EXISTS.format(name=product.name))
    db.refresh(product)
    return Ok(product)


def create_product(db: Session, data: ProductIn) -> Result[Product]:
    """
    Insert a product under an existing category.

    Checks run in order: price (VALIDATION), category (NOT_FOUND),
    name (CONFLICT). Nothing is written when any check fails.
    """
    price = normalize_price(data.price)
    if isinstance(price, Err):
        return price
    category = get_category(db, data.category)
    if isinstance(category, Err):
        return category
    if _name_taken(db, data.name):
        return Err(ErrorKind.CONFLICT, PRODUCT_EXISTS.format(name=data.name))

    product = Product(
        name=data.name,
        description=data.description,
        price=price.value,
        category=category.value,
    )
    db.add(product)
    result = _commit(db, product)
    if isinstance(result, Ok):
        logger.info(
            "Product created",
            extra={"product_id": product.id, "category_id": product.category_id},
        )
    return result


def update_product(db: Session, product_id: int, data: ProductIn) -> Result[Product]:
    """Replace every field of a product, with the same checks as create_product."""
    found = get_product(db, product_id)
    if isinstance(found, Err):
        return found
    product = found.value
    price = normalize_price(data.price)
    if isinstance(price, Err):
        return price

    category: Category = product.category
    if category.name != data.category:
        lookup = get_category(db, data.category)
        if isinstance(lookup, Err):
            return lookup
        category = lookup.value
    if _name_taken(db, data.name, exclude_id=product.id):
        return Err(ErrorKind.CONFLICT, PRODUCT_EXISTS.format(name=data.name))

    product.name = data.name
    product.description = data.description
    product.price = price.value
    product.category = category
    return _commit(db, product)


def delete_product(db: Session, product_id: int) -> Result[Product]:
    found = get_product(db, product_id)
    if isinstance(found, Err):
        return found
    db.delete(found.value)
    db.commit()
    logger.info("Product deleted", extra={"product_id": product_id})
    return found
