from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from lunch_api.db.database import get_db
from lunch_api.models.polls import Poll
from lunch_api.schemas.poll import PollCreate, PollRead, PollUpdate, PollWithItemsRead
from lunch_api.core.access import Identity
from lunch_api.core.constants import API_PREFIX
from lunch_api.services import polls_service
from lunch_api.api.endpoints.dependencies import (
    optional_auth,
    poll_exists,
    poll_owned_by_caller,
    require_auth
)
from lunch_api.api.responses import (
    get_poll_list_responses,
    get_poll_create_responses,
    get_single_poll_responses,
    get_poll_update_responses,
    get_poll_delete_responses
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/polls", tags=["polls"])

@router.get(
    "",
    response_model=List[PollRead],
    summary="List the caller's polls",
    responses=get_poll_list_responses()
)
def get_my_polls(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth)
):
    """Polls owned by the authenticated caller, oldest first."""
    logger.info(f"Listing polls for user {identity.user_id}")
    return polls_service.get_polls_by_user_id(db, identity.user_id)

@router.post(
    "",
    response_model=PollWithItemsRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new poll",
    description="Create a poll, optionally with an initial batch of items. Without a bearer token the poll has no owner.",
    responses=get_poll_create_responses()
)
def create_poll(
    poll: PollCreate,
    response: Response,
    db: Session = Depends(get_db),
    identity: Identity = Depends(optional_auth)
):
    """
    Create a poll.

    - **end_time**: required
    - **poll_name**: optional
    - **items**: optional list of items, validated as one batch and stored in
      the same transaction as the poll
    """
    logger.info(
        f"{'Anonymous caller' if identity.is_anonymous else f'User {identity.user_id}'} "
        f"attempting to create poll: '{poll.poll_name}'"
    )
    try:
        db_poll = polls_service.create_poll(db, poll, identity)
    except SQLAlchemyError as e:
        logger.error(f"Database error creating poll: {e}")
        db.rollback()
        raise

    response.headers["Location"] = f"{API_PREFIX}/polls/{db_poll.id}"
    return db_poll

@router.get(
    "/{poll_id}",
    response_model=PollWithItemsRead,
    summary="Get a poll and its items",
    responses=get_single_poll_responses()
)
def get_poll(poll: Poll = Depends(poll_exists)):
    """Any caller may read a poll."""
    logger.info(f"Poll retrieved: ID {poll.id}")
    return poll

@router.patch(
    "/{poll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a poll",
    description="Change the name or end time. Only the owner may update a poll; every item's votes are reset to 0.",
    responses=get_poll_update_responses()
)
def update_poll(
    poll_update: PollUpdate,
    poll: Poll = Depends(poll_owned_by_caller),
    db: Session = Depends(get_db)
):
    """Update a poll. Only the owner can update their polls."""
    fields = polls_service.collect_update_fields(poll_update)
    try:
        polls_service.update_poll(db, poll, fields)
    except SQLAlchemyError as e:
        logger.error(f"Database error updating poll {poll.id}: {e}")
        db.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete(
    "/{poll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a poll",
    description="Delete a poll and all of its items. Only the owner may delete a poll.",
    responses=get_poll_delete_responses()
)
def delete_poll(
    poll: Poll = Depends(poll_owned_by_caller),
    db: Session = Depends(get_db)
):
    try:
        polls_service.delete_poll(db, poll)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting poll {poll.id}: {e}")
        db.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)
