"""
Invite model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from studio.utils.time_utils import utc_now


class Invite(SQLModel, table=True):
    """Invite table - a one-time link a teacher sends to bring a student into the studio.

    An invite is active while used_at is NULL and expires_at is in the future.
    """
    __tablename__ = "invite"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: int = Field(foreign_key="user.id", index=True)
    email: Optional[str] = Field(default=None, index=True)  # None means anyone holding the link
    token: str = Field(unique=True, index=True, max_length=64)
    expires_at: datetime
    used_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
