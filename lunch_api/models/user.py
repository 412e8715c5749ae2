from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lunch_api.db.database import Base

# Define the User model
class User(Base):
    __tablename__ = "whatsforlunch_users"

    id = Column(Integer, primary_key=True, index=True)
    user_name = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash, never serialized
    date_created = Column(DateTime(timezone=True), default=func.now(), nullable=False)

    # Polls reference their owner for authorization only; they outlive a missing owner
    polls = relationship("Poll", back_populates="owner", passive_deletes=True)
