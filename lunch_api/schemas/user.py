from pydantic import BaseModel, ConfigDict
from typing import Optional
from lunch_api.schemas.common import SanitizedText, UTCDateTime

# Define a schema for registering a new user.
# Fields are optional here so the registration rules can report them in order.
class UserCreate(BaseModel):
    user_name: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None

# Define a schema for reading user data (the password hash is never exposed)
class UserRead(BaseModel):
    id: int
    user_name: SanitizedText
    full_name: SanitizedText
    date_created: UTCDateTime

    # Enable ORM mode to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)
