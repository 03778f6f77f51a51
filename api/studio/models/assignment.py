"""
Assignment, submission and feedback models.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime

from studio.models.enums import AssignmentStatus
from studio.utils.time_utils import utc_now


class Assignment(SQLModel, table=True):
    """Assignment table - work a teacher hands out to one or more students."""
    __tablename__ = "assignment"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: int = Field(foreign_key="user.id", index=True)
    title: str
    description: Optional[str] = Field(default=None)
    due_date: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    # Relationships
    students: List["AssignmentStudent"] = Relationship(back_populates="assignment")


class AssignmentStudent(SQLModel, table=True):
    """Links an assignment to a student and tracks that student's progress."""
    __tablename__ = "assignment_student"

    id: Optional[int] = Field(default=None, primary_key=True)
    assignment_id: int = Field(foreign_key="assignment.id", index=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    status: str = Field(default=AssignmentStatus.PENDING.value, max_length=20)

    # Relationships
    assignment: Optional[Assignment] = Relationship(back_populates="students")


class Submission(SQLModel, table=True):
    """Submission table - a student's uploaded work for an assignment."""
    __tablename__ = "submission"

    id: Optional[int] = Field(default=None, primary_key=True)
    assignment_id: int = Field(foreign_key="assignment.id", index=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    file_url: str  # Opaque object-storage URL
    file_type: str = Field(max_length=10)  # 'pdf', 'audio' or 'video'
    notes: Optional[str] = Field(default=None)
    submitted_at: datetime = Field(default_factory=utc_now)


class Feedback(SQLModel, table=True):
    """Feedback table - at most one teacher review per submission."""
    __tablename__ = "feedback"

    id: Optional[int] = Field(default=None, primary_key=True)
    submission_id: int = Field(foreign_key="submission.id", unique=True, index=True)
    teacher_id: int = Field(foreign_key="user.id")
    content: str
    rating: Optional[int] = Field(default=None)  # 1-5
    created_at: datetime = Field(default_factory=utc_now)
