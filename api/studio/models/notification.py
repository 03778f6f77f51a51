"""
Notification model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from studio.utils.time_utils import utc_now


class Notification(SQLModel, table=True):
    """Notification table - one row per recipient, unread while read_at is null."""
    __tablename__ = "notification"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)  # Recipient
    type: str = Field(max_length=50)  # Free-form category tag
    title: str
    content: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None)  # Deep link into the dashboard
    read_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
