from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.orm import Session
import logging

from lunch_api.db.database import get_db
from lunch_api.models.user import User
from lunch_api.core.constants import AuthConfig, ErrorMessages
from lunch_api.core.exception import BadRequestError
from lunch_api.core.security import TokenService
from lunch_api.services import users_service
from lunch_api.api.endpoints.dependencies import get_current_user, get_token_service
from lunch_api.api.responses import (
    get_login_responses,
    get_token_responses,
    get_refresh_responses
)

# Setup logging
logger = logging.getLogger(__name__)

class AuthToken(BaseModel):
    authToken: str

class Token(BaseModel):
    access_token: str
    token_type: str = AuthConfig.TOKEN_TYPE

class LoginRequest(BaseModel):
    user_name: Optional[str] = None
    password: Optional[str] = None

router = APIRouter(prefix="/auth", tags=["auth"])


def _authenticate(db: Session, user_name: Optional[str], password: Optional[str]) -> User:
    for field, value in (("user_name", user_name), ("password", password)):
        if not value:
            raise BadRequestError(ErrorMessages.MISSING_FIELD.format(field=field))

    user = users_service.authenticate_user(db, user_name, password)
    if user is None:
        logger.warning(f"Failed login attempt for user_name: {user_name}")
        raise BadRequestError(ErrorMessages.INCORRECT_CREDENTIALS)
    return user


@router.post("/login", response_model=AuthToken, responses=get_login_responses())
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange a user_name and password for a bearer token.
    """
    logger.info(f"Login attempt for user_name: {login_data.user_name}")
    user = _authenticate(db, login_data.user_name, login_data.password)

    logger.info(f"Login successful for user: {user.user_name}")
    return {"authToken": token_service.issue(user.id, user.user_name)}


@router.post("/token", response_model=Token, responses=get_token_responses())
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    OAuth2 password flow used by the interactive docs. Enter the user_name in
    the 'username' field.
    """
    logger.info(f"OAuth2 token request for user_name: {form_data.username}")
    user = _authenticate(db, form_data.username, form_data.password)

    return {"access_token": token_service.issue(user.id, user.user_name), "token_type": AuthConfig.TOKEN_TYPE}


@router.post("/refresh", response_model=AuthToken, responses=get_refresh_responses())
def refresh_token(
    current_user: User = Depends(get_current_user),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Issue a fresh token for the authenticated caller.
    """
    logger.info(f"Token refresh for user: {current_user.user_name}")
    return {"authToken": token_service.issue(current_user.id, current_user.user_name)}
