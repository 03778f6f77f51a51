"""
Notification schemas.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    """Notification response schema."""
    id: int
    user_id: int
    type: str
    title: str
    content: Optional[str] = None
    link: Optional[str] = None
    read_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MarkAllReadResponse(BaseModel):
    """Result of marking every unread notification as read."""
    updated_count: int
