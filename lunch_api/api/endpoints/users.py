from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from lunch_api.db.database import get_db
from lunch_api.models.user import User
from lunch_api.schemas.user import UserCreate, UserRead
from lunch_api.core.constants import API_PREFIX
from lunch_api.services import users_service
from lunch_api.api.endpoints.dependencies import get_current_user
from lunch_api.api.responses import (
    get_registration_responses,
    get_user_profile_responses
)

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED, responses=get_registration_responses())
def create_user(user: UserCreate, response: Response, db: Session = Depends(get_db)):
    """
    Register a new user.

    Rules are checked in order and the first failure is reported: required
    fields, password length, surrounding whitespace, password complexity and
    finally username uniqueness. The password is stored as a bcrypt hash and
    never returned.
    """
    logger.info(f"Registration attempt for user_name: {user.user_name}")
    try:
        db_user = users_service.register_user(db, user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during registration: {str(e)}")
        raise

    response.headers["Location"] = f"{API_PREFIX}/users/{db_user.id}"
    return db_user

@router.get("", response_model=UserRead, responses=get_user_profile_responses())
def read_users_me(current_user: User = Depends(get_current_user)):
    """
    Get the authenticated caller's own user record.
    """
    logger.info(f"Profile retrieval for user ID: {current_user.id}")
    return current_user
