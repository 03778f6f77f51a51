"""
Lesson model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from studio.models.enums import LessonStatus
from studio.utils.time_utils import utc_now


class Lesson(SQLModel, table=True):
    """Lesson table - scheduled teacher/student time blocks.

    start_time and end_time are UTC; the interval is [start_time, end_time).
    """
    __tablename__ = "lesson"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: int = Field(foreign_key="user.id", index=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    start_time: datetime = Field(index=True)
    end_time: datetime
    status: str = Field(default=LessonStatus.SCHEDULED.value, max_length=20)  # 'scheduled', 'completed' or 'cancelled'
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
