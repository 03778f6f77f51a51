"""
Practice log and gamification endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import logging

from studio.core.database import get_session
from studio.schemas.practice import GamificationStatsResponse, LogPracticeRequest, PracticeLogResponse
from studio.services.practice_service import get_practice_logs, log_practice_session
from studio.services.streak_service import get_gamification_stats
from studio.services.user_service import get_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice", tags=["practice"])


@router.post("", response_model=PracticeLogResponse, status_code=status.HTTP_201_CREATED)
async def log_practice(
    user_id: int,
    request: LogPracticeRequest,
    session: Session = Depends(get_session)
):
    """Log a practice session for the acting student."""
    return log_practice_session(
        session,
        student_id=user_id,
        practice_date=request.date,
        duration_minutes=request.duration_minutes,
        notes=request.notes,
    )


@router.get("", response_model=List[PracticeLogResponse])
async def list_practice_logs(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Practice history, newest first."""
    get_user(session, user_id)
    return get_practice_logs(session, user_id)


@router.get("/stats", response_model=GamificationStatsResponse)
async def practice_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """
    Streak and weekly goal progress.

    The streak counts consecutive UTC calendar days ending today or yesterday.
    """
    get_user(session, user_id)
    return GamificationStatsResponse(**get_gamification_stats(session, user_id))
