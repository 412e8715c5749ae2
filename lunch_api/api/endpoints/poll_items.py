from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from lunch_api.db.database import get_db
from lunch_api.models.polls import Poll, PollItem
from lunch_api.schemas.poll import PollItemCreate, PollItemRead, PollItemUpdate
from lunch_api.core.constants import API_PREFIX
from lunch_api.services import poll_items_service
from lunch_api.api.endpoints.dependencies import (
    item_exists,
    item_poll_owned_by_caller,
    poll_open_to_caller,
    poll_owned_by_caller
)
from lunch_api.api.responses import (
    get_item_list_responses,
    get_item_create_responses,
    get_item_update_responses,
    get_item_delete_responses,
    get_item_vote_responses,
    get_reset_votes_responses
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/items", tags=["items"])

@router.get(
    "/poll/{poll_id}",
    response_model=List[PollItemRead],
    summary="List the items of a poll",
    responses=get_item_list_responses()
)
def get_poll_items(poll_id: int, db: Session = Depends(get_db)):
    """Any caller may list a poll's items. An unknown poll has no items."""
    return poll_items_service.get_items_by_poll_id(db, poll_id)

@router.post(
    "/poll/{poll_id}",
    response_model=List[PollItemRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a batch of items to a poll",
    description="Anonymous callers may add items only to polls without an owner. One invalid item rejects the whole batch.",
    responses=get_item_create_responses()
)
def create_poll_items(
    items: List[PollItemCreate],
    response: Response,
    poll: Poll = Depends(poll_open_to_caller),
    db: Session = Depends(get_db)
):
    logger.info(f"Adding {len(items)} items to poll {poll.id}")
    try:
        db_items = poll_items_service.insert_items(db, poll.id, items)
    except SQLAlchemyError as e:
        logger.error(f"Database error adding items to poll {poll.id}: {e}")
        db.rollback()
        raise

    response.headers["Location"] = f"{API_PREFIX}/items/poll/{poll.id}"
    return db_items

@router.patch(
    "/vote/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Vote for an item",
    description="Open to every caller; adds one vote.",
    responses=get_item_vote_responses()
)
def vote_item(
    item: PollItem = Depends(item_exists),
    db: Session = Depends(get_db)
):
    item_id = item.id
    try:
        poll_items_service.increment_votes(db, item_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error voting on item {item_id}: {e}")
        db.rollback()
        raise

    logger.info(f"Vote recorded for item {item_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch(
    "/resetVotes/{poll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset the votes of every item in a poll",
    responses=get_reset_votes_responses()
)
def reset_poll_votes(
    poll: Poll = Depends(poll_owned_by_caller),
    db: Session = Depends(get_db)
):
    try:
        poll_items_service.reset_votes(db, poll.id)
    except SQLAlchemyError as e:
        logger.error(f"Database error resetting votes of poll {poll.id}: {e}")
        db.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update an item",
    description="Only the owner of the item's poll may update it.",
    responses=get_item_update_responses()
)
def update_item(
    item_update: PollItemUpdate,
    item: PollItem = Depends(item_poll_owned_by_caller),
    db: Session = Depends(get_db)
):
    fields = poll_items_service.collect_update_fields(item_update)
    try:
        poll_items_service.update_item(db, item, fields)
    except SQLAlchemyError as e:
        logger.error(f"Database error updating item {item.id}: {e}")
        db.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an item",
    description="Only the owner of the item's poll may delete it.",
    responses=get_item_delete_responses()
)
def delete_item(
    item: PollItem = Depends(item_poll_owned_by_caller),
    db: Session = Depends(get_db)
):
    try:
        poll_items_service.delete_item(db, item)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting item {item.id}: {e}")
        db.rollback()
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)
