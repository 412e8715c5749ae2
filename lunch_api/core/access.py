"""
Ownership rules for polls and poll items.

A poll's ``user_id`` is the only authorization anchor. Items carry no owner of
their own: an item is mutable by whoever owns the poll it belongs to, resolved
by loading that poll at check time.
"""

from typing import Optional
import logging

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from lunch_api.core.constants import ErrorMessages
from lunch_api.core.exception import ForbiddenError
from lunch_api.models.polls import Poll, PollItem

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Who is making the request. ``user_id`` is None for the anonymous caller."""
    user_id: Optional[int] = None
    user_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = Identity()


def ensure_owner(owner_id: Optional[int], identity: Identity, poll_id: Optional[int] = None) -> None:
    """Raise ForbiddenError unless ``identity`` owns the resource.

    The anonymous identity only matches an owner-less poll.
    """
    if owner_id != identity.user_id:
        logger.warning(
            f"{'Anonymous caller' if identity.is_anonymous else f'User {identity.user_id}'} "
            f"refused on poll {poll_id} owned by {owner_id}"
        )
        raise ForbiddenError(ErrorMessages.POLL_BELONGS_TO_OTHER_USER)


def ensure_poll_owner(poll: Poll, identity: Identity) -> Poll:
    ensure_owner(poll.user_id, identity, poll_id=poll.id)
    return poll


class OrphanedItemError(RuntimeError):
    """An item points at a poll that is gone; surfaces as a 500, not a 404."""


def parent_poll(db: Session, item: PollItem) -> Poll:
    """Load the poll an item belongs to."""
    poll = db.query(Poll).filter(Poll.id == item.poll_id).first()
    if poll is None:
        logger.error(f"Item {item.id} references missing poll {item.poll_id}")
        raise OrphanedItemError(f"Item {item.id} references missing poll {item.poll_id}")
    return poll


def ensure_item_owner(db: Session, item: PollItem, identity: Identity) -> Poll:
    """Transitive ownership: the item is checked against its poll's owner."""
    poll = parent_poll(db, item)
    ensure_owner(poll.user_id, identity, poll_id=poll.id)
    return poll
