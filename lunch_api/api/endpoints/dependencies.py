"""
Authorization steps shared by the routers.

Each route lists the steps it needs as dependencies, and FastAPI runs them in
declaration order: authentication, then the resource lookup, then the
ownership comparison. The first step that fails ends the request. Results are
also left on ``request.state`` for handlers further down.
"""

from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from lunch_api.core.access import ANONYMOUS, Identity, ensure_item_owner, ensure_poll_owner
from lunch_api.core.constants import API_PREFIX, ErrorMessages
from lunch_api.core.exception import NotFoundError, UnauthenticatedError, UnauthorizedError
from lunch_api.core.security import InvalidTokenError, TokenService
from lunch_api.db.database import get_db
from lunch_api.models.polls import Poll, PollItem
from lunch_api.models.user import User
from lunch_api.services import poll_items_service, polls_service, users_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing token is reported by the steps below, not by FastAPI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/auth/token", auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def resolve_user(db: Session, token_service: TokenService, token: str) -> User:
    """Verify ``token`` and load the user it names."""
    try:
        payload = token_service.verify(token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise UnauthorizedError(ErrorMessages.UNAUTHORIZED_REQUEST)

    user = users_service.get_user_by_user_name(db, payload.sub)
    if user is None or (payload.user_id is not None and payload.user_id != user.id):
        logger.warning(f"Bearer token names unknown user '{payload.sub}'")
        raise UnauthorizedError(ErrorMessages.UNAUTHORIZED_REQUEST)

    return user


def _identify(request: Request, user: User) -> Identity:
    identity = Identity(user_id=user.id, user_name=user.user_name)
    request.state.user = user
    request.state.identity = identity
    return identity


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme),
    token_service: TokenService = Depends(get_token_service)
) -> User:
    """The authenticated user; 401 when there is no usable bearer token."""
    if not token:
        raise UnauthenticatedError(ErrorMessages.MISSING_BEARER_TOKEN)
    user = resolve_user(db, token_service, token)
    _identify(request, user)
    return user


def require_auth(request: Request, user: User = Depends(get_current_user)) -> Identity:
    return request.state.identity


def optional_auth(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme),
    token_service: TokenService = Depends(get_token_service)
) -> Identity:
    """Like require_auth when an Authorization header is sent; the anonymous identity otherwise.

    A header that is present but carries no bearer token fails as it would
    under require_auth rather than falling back to anonymous.
    """
    if not request.headers.get("Authorization"):
        request.state.identity = ANONYMOUS
        return ANONYMOUS
    if not token:
        raise UnauthenticatedError(ErrorMessages.MISSING_BEARER_TOKEN)
    user = resolve_user(db, token_service, token)
    return _identify(request, user)


def poll_exists(request: Request, poll_id: int, db: Session = Depends(get_db)) -> Poll:
    poll = polls_service.get_poll_by_id(db, poll_id)
    if poll is None:
        logger.warning(f"Poll not found: ID {poll_id}")
        raise NotFoundError(ErrorMessages.POLL_NOT_FOUND)
    request.state.poll = poll
    return poll


def item_exists(request: Request, item_id: int, db: Session = Depends(get_db)) -> PollItem:
    item = poll_items_service.get_item_by_id(db, item_id)
    if item is None:
        logger.warning(f"Item not found: ID {item_id}")
        raise NotFoundError(ErrorMessages.ITEM_NOT_FOUND)
    request.state.item = item
    return item


def poll_owned_by_caller(
    identity: Identity = Depends(require_auth),
    poll: Poll = Depends(poll_exists)
) -> Poll:
    """RequireAuth, then ResourceExists(poll), then OwnershipCheck(poll)."""
    return ensure_poll_owner(poll, identity)


def poll_open_to_caller(
    identity: Identity = Depends(optional_auth),
    poll: Poll = Depends(poll_exists)
) -> Poll:
    """OptionalAuth, then ResourceExists(poll), then OwnershipCheck(poll).

    Anonymous callers pass only for polls without an owner.
    """
    return ensure_poll_owner(poll, identity)


def item_poll_owned_by_caller(
    identity: Identity = Depends(require_auth),
    item: PollItem = Depends(item_exists),
    db: Session = Depends(get_db)
) -> PollItem:
    """RequireAuth, then ResourceExists(item), then OwnershipCheck on the item's poll."""
    ensure_item_owner(db, item, identity)
    return item
