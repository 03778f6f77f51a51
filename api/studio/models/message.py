"""
Direct message model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from studio.utils.time_utils import utc_now


class Message(SQLModel, table=True):
    """Message table - direct messages between a teacher and a student."""
    __tablename__ = "message"

    id: Optional[int] = Field(default=None, primary_key=True)
    sender_id: int = Field(foreign_key="user.id", index=True)
    receiver_id: int = Field(foreign_key="user.id", index=True)
    content: str
    created_at: datetime = Field(default_factory=utc_now)
