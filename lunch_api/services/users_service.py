import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from lunch_api.core.constants import AuthConfig, ErrorMessages
from lunch_api.core.exception import BadRequestError
from lunch_api.core.security import get_password_hash, verify_password
from lunch_api.models.user import User
from lunch_api.schemas.user import UserCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_name", "password", "full_name")

REGEX_UPPER_LOWER_NUMBER_SPECIAL = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[" + re.escape(AuthConfig.PASSWORD_SPECIAL_CHARS) + r"])\S+"
)


def validate_password(password: str) -> Optional[str]:
    """Return the first password rule ``password`` breaks, or None."""
    if len(password) < AuthConfig.MIN_PASSWORD_LENGTH:
        return ErrorMessages.PASSWORD_TOO_SHORT
    if len(password) > AuthConfig.MAX_PASSWORD_LENGTH:
        return ErrorMessages.PASSWORD_TOO_LONG
    if password.startswith(" ") or password.endswith(" "):
        return ErrorMessages.PASSWORD_SURROUNDING_SPACE
    if not REGEX_UPPER_LOWER_NUMBER_SPECIAL.match(password):
        return ErrorMessages.PASSWORD_NOT_COMPLEX
    return None


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_user_name(db: Session, user_name: str) -> Optional[User]:
    return db.query(User).filter(User.user_name == user_name).first()


def has_user_with_user_name(db: Session, user_name: str) -> bool:
    return get_user_by_user_name(db, user_name) is not None


def register_user(db: Session, user: UserCreate) -> User:
    """Validate and store a new user.

    Rules run in a fixed order and the first failure wins; the username lookup
    comes last because it is the only one that needs the database.
    """
    for field in REQUIRED_FIELDS:
        if not getattr(user, field):
            raise BadRequestError(ErrorMessages.MISSING_FIELD.format(field=field))

    password_error = validate_password(user.password)
    if password_error:
        raise BadRequestError(password_error)

    if has_user_with_user_name(db, user.user_name):
        logger.warning(f"Registration failed: Username '{user.user_name}' already exists")
        raise BadRequestError(ErrorMessages.DUPLICATE_USERNAME)

    db_user = User(
        user_name=user.user_name,
        full_name=user.full_name,
        password=get_password_hash(user.password),
        date_created=datetime.now(timezone.utc)
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    logger.info(f"User registered successfully: ID {db_user.id}, user_name: {db_user.user_name}")
    return db_user


def authenticate_user(db: Session, user_name: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    user = get_user_by_user_name(db, user_name)
    if user is None or not verify_password(password, user.password):
        return None
    return user
