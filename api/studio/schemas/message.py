"""
Direct message schemas.
"""
from pydantic import BaseModel, Field
from datetime import datetime


class SendMessageRequest(BaseModel):
    """Send a direct message."""
    receiver_id: int = Field(..., description="Receiver user ID")
    content: str = Field(..., description="Message text")


class MessageResponse(BaseModel):
    """Message response schema."""
    id: int
    sender_id: int
    receiver_id: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
