import pytest
from datetime import datetime, timezone
from types import SimpleNamespace

import bcrypt
from fastapi.testclient import TestClient
from jose import jwt

from lunch_api.application import create_app
from lunch_api.core.config import Settings
from lunch_api.models.user import User
from lunch_api.models.polls import Poll, PollItem

TEST_SECRET = "test-jwt-secret"
FIXTURE_DATE = datetime(2029, 1, 22, 16, 28, 32, tzinfo=timezone.utc)
XSS_TEXT = 'Naughty naughty very naughty <script>alert("xss");</script>'
XSS_ESCAPED = 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;'


def fast_hash(password: str) -> str:
    """bcrypt hash with a low cost factor so seeding stays quick"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def make_auth_header(user, secret: str = TEST_SECRET) -> dict:
    """Authorization header for ``user``, signed with ``secret``"""
    token = jwt.encode({"user_id": user.id, "sub": user.user_name}, secret, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


# Fixture data: users 1 and 4 own polls, poll 4 is anonymous
def make_users():
    return [
        SimpleNamespace(id=index, user_name=f"test-user-{index}", full_name=f"Test user {index}", password="password")
        for index in range(1, 5)
    ]


def make_polls(users):
    owners = [users[0].id, users[3].id, users[0].id, None]
    return [
        SimpleNamespace(id=index, poll_name=f"test-poll-{index}", end_time=FIXTURE_DATE, user_id=owner)
        for index, owner in enumerate(owners, start=1)
    ]


def make_poll_items(polls):
    layout = [(0, 3), (0, 2), (1, 0), (1, 4), (2, 6), (2, 1), (3, 3), (3, 2)]
    return [
        SimpleNamespace(
            id=index,
            item_name=f"test item {index}",
            item_address=f"test item address {index}",
            item_cuisine=f"test item cuisine {index}",
            item_link=f"https://example.com/item-{index}",
            item_votes=votes,
            poll_id=polls[poll_index].id
        )
        for index, (poll_index, votes) in enumerate(layout, start=1)
    ]


def seed_users(session, users):
    session.add_all([
        User(
            id=user.id,
            user_name=user.user_name,
            full_name=user.full_name,
            password=fast_hash(user.password),
            date_created=FIXTURE_DATE
        )
        for user in users
    ])
    session.commit()


def seed_tables(session, users, polls=(), items=()):
    seed_users(session, users)
    session.add_all([
        Poll(id=poll.id, poll_name=poll.poll_name, end_time=poll.end_time, date_created=FIXTURE_DATE, user_id=poll.user_id)
        for poll in polls
    ])
    session.flush()
    session.add_all([
        PollItem(
            id=item.id,
            item_name=item.item_name,
            item_address=item.item_address,
            item_cuisine=item.item_cuisine,
            item_link=item.item_link,
            item_votes=item.item_votes,
            date_created=FIXTURE_DATE,
            poll_id=item.poll_id
        )
        for item in items
    ])
    session.commit()


@pytest.fixture
def settings():
    """Testing configuration on a private in-memory database"""
    return Settings(environment="testing", database_url="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app):
    """Session on the same database the application uses"""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_users():
    return make_users()


@pytest.fixture
def test_polls(test_users):
    return make_polls(test_users)


@pytest.fixture
def test_items(test_polls):
    return make_poll_items(test_polls)


@pytest.fixture
def seeded_users(db_session, test_users):
    seed_users(db_session, test_users)
    return test_users


@pytest.fixture
def seeded(db_session, test_users, test_polls, test_items):
    """Users, polls and items in the database"""
    seed_tables(db_session, test_users, test_polls, test_items)
    return SimpleNamespace(users=test_users, polls=test_polls, items=test_items)
