"""
User and roster schemas.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from studio.models.enums import UserRole


class CreateUserRequest(BaseModel):
    """Create user request schema."""
    email: EmailStr = Field(..., description="Email address")
    full_name: Optional[str] = Field(None, max_length=200, description="Display name")
    role: UserRole = Field(..., description="'teacher' or 'student'")
    avatar_url: Optional[str] = Field(None, description="Avatar URL from object storage")


class LinkStudentRequest(BaseModel):
    """Attach a student to a teacher's roster."""
    teacher_id: int = Field(..., description="Teacher user ID")
    weekly_practice_goal_minutes: Optional[int] = Field(
        None, ge=1, le=10080, description="Weekly practice goal in minutes (defaults to the studio default)"
    )


class UserResponse(BaseModel):
    """User response schema."""
    id: int
    email: str
    full_name: Optional[str] = None
    role: str
    avatar_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Short user representation used for contacts and rosters."""
    id: int
    full_name: Optional[str] = None
    email: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class UpdateProfileRequest(BaseModel):
    """Profile settings; omitted fields are left unchanged."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=200, description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL from object storage")


class StudentProfileResponse(BaseModel):
    """A roster entry as the teacher sees it."""
    user_id: int
    teacher_id: int
    weekly_practice_goal_minutes: Optional[int] = None
    instrument: Optional[str] = None
    skill_level: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class UpdateStudentNotesRequest(BaseModel):
    """Private teacher notes about a student."""
    notes: Optional[str] = Field(None, max_length=5000, description="Notes (blank clears them)")
