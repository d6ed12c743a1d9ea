"""Registration and credential checks; issues access tokens."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.core.result import Err, ErrorKind, Ok, Result
from app.core.security import create_access_token, hash_password, verify_password
from app.models import User
from app.services.users import USERNAME_TAKEN, create_user, get_user_by_username

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

USER_NOT_REGISTERED = "This user does not exist. Please register first."
INVALID_CREDENTIALS = "Invalid credentials. Please try again."


def register_user(
    db: Session, settings: "Settings", username: str, password: str
) -> Result[User]:
    """Create an account with the default role. CONFLICT if the username is taken."""
    if isinstance(get_user_by_username(db, username), Ok):
        return Err(ErrorKind.CONFLICT, USERNAME_TAKEN.format(username=username))
    password_hash = hash_password(password, rounds=settings.BCRYPT_ROUNDS)
    return create_user(db, username=username, password_hash=password_hash)


def login(db: Session, settings: "Settings", username: str, password: str) -> Result[str]:
    """
    Check credentials and return a signed access token.

    NOT_FOUND when no user has this username; UNAUTHORIZED when the password
    does not match the stored hash.
    """
    found = get_user_by_username(db, username)
    if isinstance(found, Err):
        logger.info("Login rejected: unknown username")
        return Err(ErrorKind.NOT_FOUND, USER_NOT_REGISTERED)
    user = found.value
    if not verify_password(password, user.password_hash):
        logger.info("Login rejected: bad password", extra={"user_id": user.id})
        return Err(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

    logger.info("Login succeeded", extra={"user_id": user.id})
    return Ok(issue_token(settings, user))


def issue_token(settings: "Settings", user: User) -> str:
    return create_access_token(
        settings, user_id=user.id, username=user.username, role=user.role
    )
