"""Unit tests for the ownership rules"""

from types import SimpleNamespace

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import text

from lunch_api.core.access import (
    ANONYMOUS,
    Identity,
    OrphanedItemError,
    ensure_item_owner,
    ensure_owner,
    ensure_poll_owner,
    parent_poll
)
from lunch_api.core.constants import ErrorMessages
from lunch_api.core.exception import ForbiddenError
from lunch_api.services import poll_items_service
from conftest import make_auth_header


class TestEnsureOwner:
    """Owner comparison on a poll's user_id"""

    def test_owner_passes(self):
        ensure_owner(1, Identity(user_id=1, user_name="test-user-1"))

    def test_other_user_refused(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owner(1, Identity(user_id=2, user_name="test-user-2"))
        assert exc_info.value.message == ErrorMessages.POLL_BELONGS_TO_OTHER_USER

    def test_anonymous_refused_on_owned_poll(self):
        with pytest.raises(ForbiddenError):
            ensure_owner(1, ANONYMOUS)

    def test_anonymous_passes_on_ownerless_poll(self):
        ensure_owner(None, ANONYMOUS)

    def test_user_refused_on_ownerless_poll(self):
        with pytest.raises(ForbiddenError):
            ensure_owner(None, Identity(user_id=1, user_name="test-user-1"))

    def test_poll_owner_returns_poll(self):
        poll = SimpleNamespace(id=3, user_id=1)
        assert ensure_poll_owner(poll, Identity(user_id=1)) is poll


class TestIdentity:

    def test_anonymous(self):
        assert ANONYMOUS.is_anonymous
        assert not Identity(user_id=4, user_name="test-user-4").is_anonymous


class TestItemOwnership:
    """An item is checked against the owner of its poll"""

    def test_owner_of_parent_poll_passes(self, db_session, seeded):
        item = poll_items_service.get_item_by_id(db_session, 3)
        poll = ensure_item_owner(db_session, item, Identity(user_id=4, user_name="test-user-4"))
        assert poll.id == 2

    def test_other_user_refused(self, db_session, seeded):
        item = poll_items_service.get_item_by_id(db_session, 3)
        with pytest.raises(ForbiddenError):
            ensure_item_owner(db_session, item, Identity(user_id=1, user_name="test-user-1"))

    def test_missing_parent_poll_is_an_internal_error(self, db_session, seeded):
        item = SimpleNamespace(id=99, poll_id=123456)
        with pytest.raises(OrphanedItemError):
            parent_poll(db_session, item)

    def test_orphaned_item_answers_500(self, app, db_session, seeded):
        db_session.execute(text("PRAGMA foreign_keys=OFF"))
        db_session.execute(text(
            "INSERT INTO whatsforlunch_poll_items (id, item_name, item_votes, date_created, poll_id) "
            "VALUES (99, 'orphan', 0, '2029-01-22 16:28:32', 123456)"
        ))
        db_session.commit()
        db_session.execute(text("PRAGMA foreign_keys=ON"))
        db_session.commit()

        client = TestClient(app, raise_server_exceptions=False)
        response = client.patch("/api/items/99", json={"item_name": "x"}, headers=make_auth_header(seeded.users[0]))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
