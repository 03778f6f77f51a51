"""
Assignment, submission and feedback schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from studio.models.enums import SubmissionFileType


class CreateAssignmentRequest(BaseModel):
    """Create an assignment for one or more students."""
    title: str = Field(..., min_length=1, max_length=200, description="Assignment title")
    description: Optional[str] = Field(None, description="Instructions")
    due_date: Optional[datetime] = Field(None, description="Due date")
    student_ids: List[int] = Field(..., min_length=1, description="Students to assign (at least one)")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Minuet in G",
                "description": "Record the first 16 bars",
                "due_date": "2024-03-08T18:00:00Z",
                "student_ids": [2, 3]
            }
        }


class AssignmentResponse(BaseModel):
    """Assignment response schema."""
    id: int
    teacher_id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: datetime
    student_count: int = 0


class SubmitAssignmentRequest(BaseModel):
    """Submit work for an assignment."""
    file_url: str = Field(..., min_length=1, description="URL returned by object storage")
    file_type: SubmissionFileType = Field(..., description="'pdf', 'audio' or 'video'")
    notes: Optional[str] = Field(None, description="Notes for the teacher")


class SubmissionResponse(BaseModel):
    """Submission response schema."""
    id: int
    assignment_id: int
    student_id: int
    file_url: str
    file_type: str
    notes: Optional[str] = None
    submitted_at: datetime

    class Config:
        from_attributes = True


class FeedbackRequest(BaseModel):
    """Teacher feedback on a submission."""
    content: str = Field(..., min_length=1, description="Feedback text")
    rating: Optional[int] = Field(None, ge=1, le=5, description="Rating from 1 to 5")


class FeedbackResponse(BaseModel):
    """Feedback response schema."""
    id: int
    submission_id: int
    teacher_id: int
    content: str
    rating: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UpdateAssignmentRequest(BaseModel):
    """Edit an assignment. Omitted description or due date clears it."""
    title: str = Field(..., min_length=1, max_length=200, description="Assignment title")
    description: Optional[str] = Field(None, description="Instructions")
    due_date: Optional[datetime] = Field(None, description="Due date")


class StudentAssignmentResponse(BaseModel):
    """An assignment as seen by one of its students."""
    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: datetime
    status: str = Field(..., description="'pending', 'submitted' or 'reviewed'")
    teacher_name: str


class StudentSubmissionResponse(BaseModel):
    """A student's submission with its assignment and the teacher's feedback, if any."""
    id: int
    assignment_id: int
    assignment_title: str
    due_date: Optional[datetime] = None
    file_url: str
    file_type: str
    notes: Optional[str] = None
    submitted_at: datetime
    feedback: Optional[FeedbackResponse] = None
