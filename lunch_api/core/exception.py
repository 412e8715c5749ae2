from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
import traceback
import uuid

from lunch_api.core.config import Settings
from lunch_api.core.constants import ErrorMessages

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that terminate a request with ``{"error": message}``."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(APIError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(APIError):
    """No bearer credential was supplied."""
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class UnauthorizedError(APIError):
    """A credential was supplied but is invalid, stale or names an unknown user."""
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(APIError):
    """Valid identity, wrong owner."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND


def _request_id() -> str:
    return str(uuid.uuid4())[:8]


async def api_error_handler(request: Request, exc: APIError):
    """Handler for errors raised by the access pipeline and the services."""
    request_id = _request_id()
    client_ip = request.client.host if request.client else "unknown"

    logger.warning(
        f"Client error [ID: {request_id}] - "
        f"Status: {exc.status_code} - "
        f"Path: {request.url.path} - "
        f"IP: {client_ip} - "
        f"Detail: {exc.message}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Body, path and query parsing failures.

    Reported as 400 with the first problem found, like every other input error.
    """
    request_id = _request_id()
    errors = exc.errors()

    logger.warning(
        f"Validation error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Errors: {len(errors)} - "
        f"Details: {errors}"
    )

    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message}
    )


def build_server_error_handler(settings: Settings):
    """
    Catch-all handler for database and unexpected errors.

    Production hides the detail; other environments echo it back.
    """

    async def server_error_handler(request: Request, exc: Exception):
        request_id = _request_id()

        if isinstance(exc, SQLAlchemyError):
            logger.error(
                f"Database error [ID: {request_id}] - "
                f"Path: {request.url.path} - "
                f"Error: {str(exc)} - "
                f"Type: {type(exc).__name__}"
            )
        else:
            tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            logger.critical(
                f"Unexpected error [ID: {request_id}] - "
                f"Path: {request.url.path} - "
                f"Error: {str(exc)} - "
                f"Type: {type(exc).__name__} - "
                f"Traceback: {tb_str}"
            )

        if settings.is_production:
            content = {"error": {"message": ErrorMessages.SERVER_ERROR}}
        else:
            content = {"message": str(exc), "error": type(exc).__name__}

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content
        )

    return server_error_handler


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    server_error_handler = build_server_error_handler(settings)

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
