import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from pydantic import AnyUrl, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from lunch_api.core.constants import ErrorMessages
from lunch_api.core.exception import BadRequestError
from lunch_api.models.polls import PollItem
from lunch_api.schemas.poll import PollItemCreate, PollItemUpdate

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("item_name", "item_address", "item_cuisine", "item_link")

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_link(link: str) -> bool:
    """True for an absolute URL with a scheme and a host."""
    try:
        url = _url_adapter.validate_python(link)
    except ValidationError:
        return False
    return bool(url.host)


def validate_item(item: PollItemCreate) -> None:
    if not item.item_name:
        raise BadRequestError(ErrorMessages.MISSING_FIELD.format(field="item_name"))
    if item.item_link and not is_valid_link(item.item_link):
        raise BadRequestError(ErrorMessages.INVALID_LINK)


def validate_items(items: Sequence[PollItemCreate]) -> None:
    """Check a whole batch; the first bad item aborts it."""
    for item in items:
        validate_item(item)


def collect_update_fields(update: PollItemUpdate) -> Dict[str, str]:
    """Keep the truthy updatable fields; an empty result is a malformed request."""
    fields = {
        field: value
        for field, value in update.model_dump(include=set(UPDATABLE_FIELDS)).items()
        if value
    }
    if not fields:
        raise BadRequestError(ErrorMessages.ITEM_UPDATE_EMPTY)
    if "item_link" in fields and not is_valid_link(fields["item_link"]):
        raise BadRequestError(ErrorMessages.INVALID_LINK)
    return fields


def get_items_by_poll_id(db: Session, poll_id: int) -> List[PollItem]:
    return db.query(PollItem).filter(PollItem.poll_id == poll_id).order_by(PollItem.id).all()


def get_item_by_id(db: Session, item_id: int) -> Optional[PollItem]:
    return db.query(PollItem).filter(PollItem.id == item_id).first()


def add_items(db: Session, poll_id: int, items: Sequence[PollItemCreate]) -> List[PollItem]:
    """Stage a validated batch on the session without committing.

    Every item gets the same ``date_created`` and starts with no votes.
    """
    date_created = datetime.now(timezone.utc)
    db_items = [
        PollItem(
            item_name=item.item_name,
            item_address=item.item_address,
            item_cuisine=item.item_cuisine,
            item_link=item.item_link,
            item_votes=0,
            date_created=date_created,
            poll_id=poll_id
        )
        for item in items
    ]
    db.add_all(db_items)
    db.flush()
    return db_items


def insert_items(db: Session, poll_id: int, items: Sequence[PollItemCreate]) -> List[PollItem]:
    """Validate and insert a batch of items as one transaction."""
    validate_items(items)

    db_items = add_items(db, poll_id, items)
    db.commit()
    for db_item in db_items:
        db.refresh(db_item)

    logger.info(f"Inserted {len(db_items)} items into poll {poll_id}")
    return db_items


def update_item(db: Session, item: PollItem, fields: Dict[str, str]) -> PollItem:
    for field, value in fields.items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    logger.info(f"Item updated successfully: ID {item.id}, Changed fields: {list(fields)}")
    return item


def delete_item(db: Session, item: PollItem) -> None:
    item_id = item.id
    db.delete(item)
    db.commit()
    logger.info(f"Item deleted successfully: ID {item_id}")


def increment_votes(db: Session, item_id: int) -> int:
    """Add one vote in a single UPDATE so concurrent votes are not lost.

    Returns the number of rows touched (0 when the item vanished meanwhile).
    """
    updated = (
        db.query(PollItem)
        .filter(PollItem.id == item_id)
        .update({PollItem.item_votes: PollItem.item_votes + 1}, synchronize_session=False)
    )
    db.commit()
    return updated


def stage_vote_reset(db: Session, poll_id: int) -> int:
    """Zero every item's votes for ``poll_id`` in the current transaction."""
    return (
        db.query(PollItem)
        .filter(PollItem.poll_id == poll_id)
        .update({PollItem.item_votes: 0}, synchronize_session=False)
    )


def reset_votes(db: Session, poll_id: int) -> int:
    reset = stage_vote_reset(db, poll_id)
    db.commit()
    logger.info(f"Votes reset for {reset} items of poll {poll_id}")
    return reset
