"""
Common schemas shared across the API.

Every text field that was typed in by a client goes back out through
``SanitizedText`` so stored markup cannot be replayed to other clients.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator

# Tag delimiters only; ampersands and quotes pass through
_TAG_ESCAPES = str.maketrans({"<": "&lt;", ">": "&gt;"})


def sanitize(value: Optional[str]) -> Optional[str]:
    """Escape ``<`` and ``>`` so stored text cannot open a tag."""
    if value is None:
        return None
    return value.translate(_TAG_ESCAPES)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive timestamps; they were written in UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


SanitizedText = Annotated[Optional[str], AfterValidator(sanitize)]
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
