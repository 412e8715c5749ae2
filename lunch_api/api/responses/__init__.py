"""
Response definitions for FastAPI endpoints.

This module provides centralized response configurations for OpenAPI documentation,
promoting reusability and maintainability across all API endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    FORBIDDEN_RESPONSE,
    SERVER_ERROR_RESPONSE,
    get_validation_error_response,
)

from .poll_responses import (
    get_poll_list_responses,
    get_poll_create_responses,
    get_single_poll_responses,
    get_poll_update_responses,
    get_poll_delete_responses,
    get_item_list_responses,
    get_item_create_responses,
    get_item_update_responses,
    get_item_delete_responses,
    get_item_vote_responses,
    get_reset_votes_responses,
)

from .auth_responses import (
    get_registration_responses,
    get_user_profile_responses,
    get_login_responses,
    get_token_responses,
    get_refresh_responses,
)

__all__ = [
    # Common responses
    "AUTH_ERROR_RESPONSE",
    "FORBIDDEN_RESPONSE",
    "SERVER_ERROR_RESPONSE",
    "get_validation_error_response",

    # Poll and item responses
    "get_poll_list_responses",
    "get_poll_create_responses",
    "get_single_poll_responses",
    "get_poll_update_responses",
    "get_poll_delete_responses",
    "get_item_list_responses",
    "get_item_create_responses",
    "get_item_update_responses",
    "get_item_delete_responses",
    "get_item_vote_responses",
    "get_reset_votes_responses",

    # Auth and user responses
    "get_registration_responses",
    "get_user_profile_responses",
    "get_login_responses",
    "get_token_responses",
    "get_refresh_responses",
]
