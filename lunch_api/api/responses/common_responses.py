"""
Common reusable response definitions for FastAPI endpoints.

Every error body is ``{"error": "<message>"}``; these helpers document the
status codes each route can produce in the OpenAPI schema.
"""

from lunch_api.core.constants import ErrorMessages
from lunch_api.schemas.error import ErrorResponse, ServerErrorResponse

# Constants for common values
CONTENT_TYPE_JSON = "application/json"


def error_response(description: str, *messages: str) -> dict:
    """Response entry with one example per possible message."""
    entry = {"description": description, "model": ErrorResponse}
    if len(messages) == 1:
        entry["content"] = {CONTENT_TYPE_JSON: {"example": {"error": messages[0]}}}
    elif messages:
        entry["content"] = {
            CONTENT_TYPE_JSON: {
                "examples": {
                    f"error_{index}": {"summary": message, "value": {"error": message}}
                    for index, message in enumerate(messages, start=1)
                }
            }
        }
    return entry


# Common authentication error response
AUTH_ERROR_RESPONSE = error_response(
    "Missing, invalid or expired bearer token",
    ErrorMessages.MISSING_BEARER_TOKEN,
    ErrorMessages.UNAUTHORIZED_REQUEST
)

FORBIDDEN_RESPONSE = error_response(
    "The poll belongs to a different user",
    ErrorMessages.POLL_BELONGS_TO_OTHER_USER
)

POLL_NOT_FOUND_RESPONSE = error_response("Poll not found", ErrorMessages.POLL_NOT_FOUND)
ITEM_NOT_FOUND_RESPONSE = error_response("Item not found", ErrorMessages.ITEM_NOT_FOUND)


def get_validation_error_response(*messages: str) -> dict:
    return error_response("Invalid request body", *messages)


# Common server error response
SERVER_ERROR_RESPONSE = {
    "description": "Internal server error (detail hidden in production)",
    "model": ServerErrorResponse,
    "content": {
        CONTENT_TYPE_JSON: {
            "examples": {
                "production": {"value": {"error": {"message": ErrorMessages.SERVER_ERROR}}},
                "development": {"value": {"message": "database is locked", "error": "OperationalError"}},
            }
        }
    }
}
