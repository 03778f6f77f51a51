"""
Practice log and gamification schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
import datetime as dt


class LogPracticeRequest(BaseModel):
    """Log a practice session."""
    date: str = Field(..., description="Practice date (ISO date, a time part is ignored)")
    duration_minutes: int = Field(..., description="Minutes practiced (positive integer)")
    notes: Optional[str] = Field(None, max_length=2000, description="Optional notes")

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2024-03-01",
                "duration_minutes": 30,
                "notes": "Scales and the first page of the sonata"
            }
        }


class PracticeLogResponse(BaseModel):
    """Practice log entry."""
    id: int
    student_id: int
    date: dt.date
    duration_minutes: int
    notes: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class GamificationStatsResponse(BaseModel):
    """Streak and weekly goal progress for a student."""
    streak: int = Field(..., description="Consecutive practice days ending today or yesterday")
    weekly_total_minutes: int = Field(..., description="Minutes practiced since Monday (UTC)")
    weekly_goal_minutes: int = Field(..., description="Weekly practice goal in minutes")
