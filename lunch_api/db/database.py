from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Define the base class for declarative models
Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite gets foreign key enforcement so that deleting a poll cascades to its
    items; an in-memory SQLite database is pinned to one shared connection.
    """
    if not database_url.startswith("sqlite"):
        # PostgreSQL or other databases
        return create_engine(database_url, pool_pre_ping=True)

    options = {"connect_args": {"check_same_thread": False}}  # Needed for SQLite with FastAPI
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Request-scoped session from the factory the application was built with."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
