"""
Authentication and user response definitions for FastAPI endpoints.
"""

from lunch_api.core.constants import ErrorMessages

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    SERVER_ERROR_RESPONSE,
    get_validation_error_response,
)


def get_registration_responses():
    return {
        400: get_validation_error_response(
            ErrorMessages.MISSING_FIELD.format(field="user_name"),
            ErrorMessages.PASSWORD_TOO_SHORT,
            ErrorMessages.PASSWORD_TOO_LONG,
            ErrorMessages.PASSWORD_SURROUNDING_SPACE,
            ErrorMessages.PASSWORD_NOT_COMPLEX,
            ErrorMessages.DUPLICATE_USERNAME
        ),
        500: SERVER_ERROR_RESPONSE,
    }


def get_user_profile_responses():
    return {401: AUTH_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE}


def get_login_responses():
    return {
        400: get_validation_error_response(
            ErrorMessages.MISSING_FIELD.format(field="user_name"),
            ErrorMessages.INCORRECT_CREDENTIALS
        ),
        500: SERVER_ERROR_RESPONSE,
    }


def get_token_responses():
    return get_login_responses()


def get_refresh_responses():
    return {401: AUTH_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE}
