"""User store: lookups, creation and deletion of user accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.result import Err, ErrorKind, Ok, Result
from app.models import MAX_INTEGER_ID, Role, User

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username '{username}' is already taken. Try another username."


def get_user_by_id(db: Session, user_id: int) -> Result[User]:
    user = db.get(User, user_id) if 0 < user_id <= MAX_INTEGER_ID else None
    if user is None:
        return Err(ErrorKind.NOT_FOUND, f"User with ID '{user_id}' not found.")
    return Ok(user)


def get_user_by_username(db: Session, username: str) -> Result[User]:
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        return Err(ErrorKind.NOT_FOUND, "User not found.")
    return Ok(user)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def create_user(
    db: Session, username: str, password_hash: str, role: Role = Role.USER
) -> Result[User]:
    """
    Persist a user whose password has already been hashed.

    Returns CONFLICT if the username is taken, including when a concurrent
    insert wins the race and the unique index rejects this one.
    """
    if not username or not password_hash:
        return Err(
            ErrorKind.VALIDATION,
            "Username and password are required to create a new user.",
        )
    taken = USERNAME_TAKEN.format(username=username)
    if db.query(User.id).filter(User.username == username).first() is not None:
        return Err(ErrorKind.CONFLICT, taken)

    user = User(username=username, password_hash=password_hash, role=role.value)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Err(ErrorKind.CONFLICT, taken)
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return Ok(user)


def delete_user(db: Session, user_id: int) -> Result[User]:
    found = get_user_by_id(db, user_id)
    if isinstance(found, Err):
        return found
    db.delete(found.value)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
    return found
