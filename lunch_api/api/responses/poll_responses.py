"""
Poll and poll item response definitions for FastAPI endpoints.
"""

from lunch_api.core.constants import ErrorMessages

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    FORBIDDEN_RESPONSE,
    ITEM_NOT_FOUND_RESPONSE,
    POLL_NOT_FOUND_RESPONSE,
    SERVER_ERROR_RESPONSE,
    get_validation_error_response,
)

MISSING_ITEM_NAME = ErrorMessages.MISSING_FIELD.format(field="item_name")
NO_CONTENT_RESPONSE = {"description": "Done, no content"}


def get_poll_list_responses():
    return {401: AUTH_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE}


def get_poll_create_responses():
    return {
        400: get_validation_error_response(
            ErrorMessages.MISSING_FIELD.format(field="end_time"),
            MISSING_ITEM_NAME,
            ErrorMessages.INVALID_LINK
        ),
        401: AUTH_ERROR_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_single_poll_responses():
    return {404: POLL_NOT_FOUND_RESPONSE, 500: SERVER_ERROR_RESPONSE}


def get_poll_update_responses():
    return {
        204: NO_CONTENT_RESPONSE,
        400: get_validation_error_response(ErrorMessages.POLL_UPDATE_EMPTY),
        401: AUTH_ERROR_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: POLL_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_poll_delete_responses():
    return {
        204: NO_CONTENT_RESPONSE,
        401: AUTH_ERROR_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: POLL_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_item_list_responses():
    return {500: SERVER_ERROR_RESPONSE}


def get_item_create_responses():
    return {
        400: get_validation_error_response(MISSING_ITEM_NAME, ErrorMessages.INVALID_LINK),
        401: AUTH_ERROR_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: POLL_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_item_update_responses():
    return {
        204: NO_CONTENT_RESPONSE,
        400: get_validation_error_response(ErrorMessages.ITEM_UPDATE_EMPTY, ErrorMessages.INVALID_LINK),
        401: AUTH_ERROR_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: ITEM_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_item_delete_responses():
    return {
        204: NO_CONTENT_RESPONSE,
        401: AUTH_ERROR_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: ITEM_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_item_vote_responses():
    return {
        204: NO_CONTENT_RESPONSE,
        404: ITEM_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    }


def get_reset_votes_responses():
    return get_poll_delete_responses()
