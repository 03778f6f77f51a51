"""
User model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from studio.models.enums import UserRole
from studio.utils.time_utils import utc_now


class User(SQLModel, table=True):
    """User table - teachers and students."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: Optional[str] = Field(default=None)  # Display name shown to the other party
    role: str = Field(default=UserRole.STUDENT.value, max_length=20)  # 'teacher' or 'student'
    avatar_url: Optional[str] = Field(default=None)  # Opaque object-storage URL
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    @property
    def is_teacher(self) -> bool:
        return self.role == UserRole.TEACHER.value

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT.value


class StudentProfile(SQLModel, table=True):
    """Links a student to their teacher and holds the weekly practice goal."""
    __tablename__ = "student_profile"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    teacher_id: int = Field(foreign_key="user.id", index=True)
    weekly_practice_goal_minutes: Optional[int] = Field(default=None)  # None means use the default goal
    instrument: Optional[str] = Field(default=None, max_length=100)
    skill_level: Optional[str] = Field(default=None, max_length=20)  # 'beginner', 'intermediate' or 'advanced'
    notes: Optional[str] = Field(default=None)  # Private teacher notes about the student
