"""
Application Constants

Centralized location for all application constants, organized by domain.
Values that vary per deployment live in ``lunch_api.core.config.Settings``.
"""

# =============================================================================
# API Configuration
# =============================================================================

class APIConfig:
    """API-level configuration constants"""

    API_PREFIX = "/api"
    API_VERSION = "1.0.0"
    API_TITLE = "What's For Lunch API"
    API_DESCRIPTION = """
    Backend for deciding where a group goes for lunch.

    ## Features
    - User registration and token based authentication
    - Polls with a deadline, owned by a user or anonymous
    - Restaurant candidates ("items") added to polls in batches
    - Open voting on items
    """

    ALLOWED_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]


# =============================================================================
# Authentication & Security
# =============================================================================

class AuthConfig:
    """Authentication and security constants"""

    # JWT Configuration
    ALGORITHM = "HS256"
    DEFAULT_EXPIRE_MINUTES = 12 * 60
    TOKEN_TYPE = "bearer"

    # Password requirements
    MIN_PASSWORD_LENGTH = 8
    MAX_PASSWORD_LENGTH = 72
    PASSWORD_SPECIAL_CHARS = "!@#$%^&"

    # bcrypt cost factor
    BCRYPT_ROUNDS = 12


# =============================================================================
# Error Messages
# =============================================================================

class ErrorMessages:
    """Standardized error messages"""

    # Authentication errors
    MISSING_BEARER_TOKEN = "Missing bearer token"
    UNAUTHORIZED_REQUEST = "Unauthorized request"
    INCORRECT_CREDENTIALS = "Incorrect user_name or password"

    # Authorization errors
    POLL_BELONGS_TO_OTHER_USER = "Poll belongs to a different user"

    # Resource errors
    POLL_NOT_FOUND = "Poll doesn't exist"
    ITEM_NOT_FOUND = "Item doesn't exist"

    # Validation errors
    MISSING_FIELD = "Missing '{field}' in request body"
    PASSWORD_TOO_SHORT = "Password must be longer than 8 characters"
    PASSWORD_TOO_LONG = "Password must be less than 72 characters"
    PASSWORD_SURROUNDING_SPACE = "Password must not start or end with empty space"
    PASSWORD_NOT_COMPLEX = (
        "Password must contain at least 1 upper case letter, lower case letter, "
        "number, and special character"
    )
    DUPLICATE_USERNAME = "Username already taken"
    INVALID_LINK = "Link is not a valid URL"
    POLL_UPDATE_EMPTY = "Request body must contain 'poll_name' or 'end_time'"
    ITEM_UPDATE_EMPTY = (
        "Request body must contain one of 'item_name', 'item_address', "
        "'item_cuisine', or 'item_link'"
    )

    # System errors
    SERVER_ERROR = "server error"


# =============================================================================
# Logging Configuration
# =============================================================================

class LoggingConfig:
    """Logging configuration constants"""

    DEFAULT_LOG_LEVEL = "INFO"
    DATABASE_LOG_LEVEL = "WARNING"

    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# Environment-Specific Constants
# =============================================================================

class EnvironmentConfig:
    """Environment-specific configuration"""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

    ALL = [DEVELOPMENT, TESTING, PRODUCTION]


# =============================================================================
# Convenience Exports
# =============================================================================

API_PREFIX = APIConfig.API_PREFIX
