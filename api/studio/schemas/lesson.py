"""
Lesson scheduling schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
import datetime as dt

from studio.models.enums import LessonStatus


class CreateLessonRequest(BaseModel):
    """Schedule a lesson. Date and start time are wall-clock in the studio timezone."""
    student_id: int = Field(..., description="Student user ID")
    date: dt.date = Field(..., description="Lesson date")
    start_time: dt.time = Field(..., description="Lesson start time (HH:MM)")
    duration_minutes: int = Field(..., description="Lesson length in minutes (positive integer)")
    notes: Optional[str] = Field(None, max_length=2000, description="Optional notes")

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": 2,
                "date": "2024-03-04",
                "start_time": "14:00",
                "duration_minutes": 60,
                "notes": "Bring the etude book"
            }
        }


class UpdateLessonRequest(CreateLessonRequest):
    """Edit a lesson. Omitting status resets it to 'scheduled'."""
    status: Optional[LessonStatus] = Field(None, description="'scheduled', 'completed' or 'cancelled'")


class LessonResponse(BaseModel):
    """Lesson with both parties' display names."""
    id: int
    teacher_id: int
    student_id: int
    start_time: dt.datetime
    end_time: dt.datetime
    status: str
    notes: Optional[str] = None
    teacher_name: Optional[str] = None
    student_name: Optional[str] = None
