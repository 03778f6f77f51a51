"""
Practice log model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
import datetime as dt

from studio.utils.time_utils import utc_now


class PracticeLog(SQLModel, table=True):
    """Practice log table - one row per logged practice session.

    Rows are never edited. Several rows may share a date; streaks only look
    at the distinct dates.
    """
    __tablename__ = "practice_log"

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    date: dt.date  # Calendar date, no time component
    duration_minutes: int
    notes: Optional[str] = Field(default=None)
    created_at: dt.datetime = Field(default_factory=utc_now)
