from lunch_api.db.database import Base
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

# Define Poll model
class Poll(Base):
    __tablename__ = "whatsforlunch_polls"

    id = Column(Integer, primary_key=True, index=True)
    poll_name = Column(String, nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=False)  # Stored, not enforced
    date_created = Column(DateTime(timezone=True), default=func.now(), nullable=False)

    # Nullable owner: anonymous polls have no user
    user_id = Column(
        Integer,
        ForeignKey("whatsforlunch_users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Relationship to User model
    owner = relationship("User", back_populates="polls")
    # A poll owns its items
    items = relationship(
        "PollItem",
        back_populates="poll",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PollItem.id"
    )


class PollItem(Base):
    __tablename__ = "whatsforlunch_poll_items"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String, nullable=False)
    item_address = Column(String, nullable=True)
    item_cuisine = Column(String, nullable=True)
    item_link = Column(String, nullable=True)
    item_votes = Column(Integer, default=0, nullable=False)
    date_created = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    poll_id = Column(
        Integer,
        ForeignKey("whatsforlunch_polls.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationship to Poll model
    poll = relationship("Poll", back_populates="items")
