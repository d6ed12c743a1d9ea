"""Category store: CRUD over categories, addressed by their unique name."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.result import Err, ErrorKind, Ok, Result
from app.models import Category, Product
from app.schemas.category import CategoryIn

logger = logging.getLogger(__name__)

CATEGORY_EXISTS = "Category named {name} already exists in the database."
CATEGORY_NOT_FOUND = "Category with name '{name}' not found."
CATEGORY_IN_USE = (
    "Category '{name}' still has products. "
    "Delete or move them before deleting the category."
)


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.id).all()


def get_category(db: Session, name: str) -> Result[Category]:
    category = db.query(Category).filter(Category.name == name).first()
    if category is None:
        return Err(ErrorKind.NOT_FOUND, CATEGORY_NOT_FOUND.format(name=name))
    return Ok(category)


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    query = db.query(Category.id).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, category: Category) -> Result[Category]:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Err(ErrorKind.CONFLICT, CATEGORY_EXISTS.format(name=category.name))
    db.refresh(category)
    return Ok(category)


def create_category(db: Session, data: CategoryIn) -> Result[Category]:
    """Insert a category. CONFLICT if the name is already used."""
    if _name_taken(db, data.name):
        return Err(ErrorKind.CONFLICT, CATEGORY_EXISTS.format(name=data.name))
    category = Category(name=data.name, description=data.description)
    db.add(category)
    result = _commit(db, category)
    if isinstance(result, Ok):
        logger.info("Category created", extra={"category_id": category.id})
    return result


def update_category(db: Session, name: str, data: CategoryIn) -> Result[Category]:
    """
    Replace name and description of the category called `name`.

    NOT_FOUND if it does not exist; CONFLICT if the new name belongs to a
    different category.
    """
    found = get_category(db, name)
    if isinstance(found, Err):
        return found
    category = found.value
    if data.name != category.name and _name_taken(db, data.name, exclude_id=category.id):
        return Err(ErrorKind.CONFLICT, CATEGORY_EXISTS.format(name=data.name))
    category.name = data.name
    category.description = data.description
    return _commit(db, category)


def delete_category(db: Session, name: str) -> Result[Category]:
    """
    Delete the category called `name`.

    A category that still has products is not deleted (CONFLICT); its
    products must be removed or moved to another category first.
    """
    found = get_category(db, name)
    if isinstance(found, Err):
        return found
    category = found.value
    product_count = (
        db.query(func.count(Product.id)).filter(Product.category_id == category.id).scalar()
    )
    if product_count:
        return Err(ErrorKind.CONFLICT, CATEGORY_IN_USE.format(name=name))
    category_id = category.id
    db.delete(category)
    try:
        db.commit()
    except IntegrityError:
        # A product was added after the count; the FK keeps the category alive
        db.rollback()
        return Err(ErrorKind.CONFLICT, CATEGORY_IN_USE.format(name=name))
    logger.info("Category deleted", extra={"category_id": category_id})
    return Ok(category)
