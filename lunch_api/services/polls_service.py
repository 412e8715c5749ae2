import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from lunch_api.core.access import Identity
from lunch_api.core.constants import ErrorMessages
from lunch_api.core.exception import BadRequestError
from lunch_api.models.polls import Poll
from lunch_api.schemas.poll import PollCreate, PollUpdate
from lunch_api.services import poll_items_service

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("poll_name", "end_time")


def get_polls_by_user_id(db: Session, user_id: int) -> List[Poll]:
    return db.query(Poll).filter(Poll.user_id == user_id).order_by(Poll.id).all()


def get_poll_by_id(db: Session, poll_id: int) -> Optional[Poll]:
    return db.query(Poll).filter(Poll.id == poll_id).first()


def create_poll(db: Session, poll: PollCreate, identity: Identity) -> Poll:
    """Insert a poll owned by ``identity`` (None for anonymous callers).

    Initial items, when supplied, are validated up front and committed in the
    same transaction as the poll.
    """
    if not poll.end_time:
        raise BadRequestError(ErrorMessages.MISSING_FIELD.format(field="end_time"))

    items = poll.items or []
    poll_items_service.validate_items(items)

    db_poll = Poll(
        poll_name=poll.poll_name,
        end_time=poll.end_time,
        date_created=datetime.now(timezone.utc),
        user_id=identity.user_id
    )
    db.add(db_poll)
    db.flush()

    if items:
        poll_items_service.add_items(db, db_poll.id, items)

    db.commit()
    db.refresh(db_poll)

    logger.info(
        f"Poll created successfully: ID {db_poll.id}, Owner: {db_poll.user_id}, Items: {len(items)}"
    )
    return db_poll


def collect_update_fields(update: PollUpdate) -> Dict[str, Any]:
    """Keep the truthy updatable fields; an empty result is a malformed request."""
    fields = {
        field: value
        for field, value in update.model_dump(include=set(UPDATABLE_FIELDS)).items()
        if value
    }
    if not fields:
        raise BadRequestError(ErrorMessages.POLL_UPDATE_EMPTY)
    return fields


def update_poll(db: Session, poll: Poll, fields: Dict[str, Any]) -> Poll:
    """Apply ``fields`` and zero the votes of every item in one commit.

    Changing a poll's terms invalidates the votes cast so far.
    """
    for field, value in fields.items():
        setattr(poll, field, value)
    db.flush()
    reset = poll_items_service.stage_vote_reset(db, poll.id)
    db.commit()
    db.refresh(poll)

    logger.info(
        f"Poll updated successfully: ID {poll.id}, Changed fields: {list(fields)}, Votes reset on {reset} items"
    )
    return poll


def delete_poll(db: Session, poll: Poll) -> None:
    """Delete a poll; its items go with it."""
    poll_id = poll.id
    db.delete(poll)
    db.commit()
    logger.info(f"Poll deleted successfully: ID {poll_id}")
