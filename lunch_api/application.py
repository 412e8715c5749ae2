import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lunch_api.api.endpoints import auth, poll_items, polls, users
from lunch_api.core.config import Settings, get_settings
from lunch_api.core.constants import APIConfig, LoggingConfig
from lunch_api.core.exception import register_exception_handlers
from lunch_api.core.security import TokenService
from lunch_api.db.database import Base, make_engine, make_session_factory

# Import models to register them with SQLAlchemy
from lunch_api.models import user, polls as poll_models  # noqa: F401

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LoggingConfig.LOG_FORMAT,
        datefmt=LoggingConfig.DATE_FORMAT
    )
    logging.getLogger("sqlalchemy.engine").setLevel(LoggingConfig.DATABASE_LOG_LEVEL)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from an explicit configuration."""
    settings = settings or get_settings()
    configure_logging(settings)

    engine = make_engine(settings.database_url)
    # Create all tables in the database
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=APIConfig.API_TITLE,
        description=APIConfig.API_DESCRIPTION,
        version=APIConfig.API_VERSION
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.token_service = TokenService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_credentials=True,
        allow_methods=APIConfig.ALLOWED_METHODS,
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    register_exception_handlers(app, settings)

    # Include routers with centralized prefix
    app.include_router(users.router, prefix=APIConfig.API_PREFIX)
    app.include_router(auth.router, prefix=APIConfig.API_PREFIX)
    app.include_router(polls.router, prefix=APIConfig.API_PREFIX)
    app.include_router(poll_items.router, prefix=APIConfig.API_PREFIX)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the What's For Lunch API!"}

    logger.info(f"Application created for the {settings.environment} environment")
    return app
