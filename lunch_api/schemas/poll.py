from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional, List
from lunch_api.schemas.common import SanitizedText, UTCDateTime


# Poll Item Schemas
class PollItemCreate(BaseModel):
    """One candidate restaurant in a batch.

    Presence and link checks run in the service so the first problem in the
    batch is reported before anything is inserted.
    """
    item_name: Optional[str] = Field(None, json_schema_extra={"example": "Taqueria El Farolito"})
    item_address: Optional[str] = Field(None, json_schema_extra={"example": "2779 Mission St"})
    item_cuisine: Optional[str] = Field(None, json_schema_extra={"example": "Mexican"})
    item_link: Optional[str] = Field(
        None,
        description="Absolute URL for the restaurant",
        json_schema_extra={"example": "https://elfarolitoinc.com"}
    )


class PollItemUpdate(BaseModel):
    """Partial update of an item. Vote counts are changed through the vote endpoints only."""
    item_name: Optional[str] = None
    item_address: Optional[str] = None
    item_cuisine: Optional[str] = None
    item_link: Optional[str] = None


class PollItemRead(BaseModel):
    """Schema for reading poll item data"""
    id: int
    item_name: SanitizedText
    item_address: SanitizedText = None
    item_cuisine: SanitizedText = None
    item_link: SanitizedText = None
    item_votes: int = Field(default=0, description="Number of votes for this item")
    date_created: UTCDateTime
    poll_id: int

    model_config = ConfigDict(from_attributes=True)


# Schema for creating a new poll
class PollCreate(BaseModel):
    poll_name: Optional[str] = Field(None, json_schema_extra={"example": "Friday lunch"})
    end_time: Optional[datetime] = Field(
        None,
        description="Deadline for voting (required)",
        json_schema_extra={"example": "2029-01-01T12:00:00Z"}
    )
    items: Optional[List[PollItemCreate]] = Field(
        None,
        description="Optional initial items, inserted in the same transaction as the poll"
    )


# Schema for updating a poll
class PollUpdate(BaseModel):
    poll_name: Optional[str] = None
    end_time: Optional[datetime] = None


# Schema for reading poll data
class PollRead(BaseModel):
    id: int
    poll_name: SanitizedText = None
    end_time: UTCDateTime
    date_created: UTCDateTime
    user_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class PollWithItemsRead(PollRead):
    """A poll together with its items, ordered by id"""
    items: List[PollItemRead] = []
