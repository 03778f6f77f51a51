"""
Invite schemas.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from studio.models.enums import SkillLevel


class CreateInviteRequest(BaseModel):
    """Invite a student by email."""
    email: EmailStr = Field(..., description="Email address the invite is for")


class InviteResponse(BaseModel):
    """Invite with the link to share with the student."""
    id: int
    email: Optional[str] = None
    expires_at: datetime
    created_at: datetime
    invite_url: str


class AcceptInviteRequest(BaseModel):
    """Sign up as a student through an invite link."""
    email: EmailStr = Field(..., description="Must match the invited email")
    full_name: str = Field(..., min_length=1, max_length=200, description="Display name")
    instrument: Optional[str] = Field(None, max_length=100, description="Instrument studied")
    skill_level: Optional[SkillLevel] = Field(None, description="'beginner', 'intermediate' or 'advanced'")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "student@example.com",
                "full_name": "Johannes Brahms",
                "instrument": "Piano",
                "skill_level": "intermediate"
            }
        }
