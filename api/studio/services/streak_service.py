"""
Practice streak and weekly goal calculations.

A streak is the number of consecutive calendar days, ending today or
yesterday, on which a student logged at least one practice session. Only the
set of distinct dates matters; durations and notes are ignored.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Optional, Union
from sqlmodel import Session, select
from sqlalchemy import func

from studio.core.config import settings
from studio.models.practice import PracticeLog
from studio.models.user import StudentProfile
from studio.services.practice_service import get_practice_dates
from studio.utils.time_utils import to_calendar_date, utc_today, week_bounds

logger = logging.getLogger(__name__)


def compute_streak(
    dates: Iterable[Union[date, datetime, str]],
    today: Optional[date] = None,
) -> int:
    """
    Count consecutive practice days ending at the most recent practice date.

    The streak is only alive if the most recent date is today or yesterday;
    otherwise it is 0 no matter how long the earlier run was.

    Args:
        dates: Practice dates in any order, duplicates allowed. Each item may be
               a date, a datetime or an ISO date string.
        today: Reference day (defaults to the current UTC date)

    Returns:
        Streak length (>= 0)

    Raises:
        ValidationError: If a date string cannot be parsed
    """
    unique_dates = {to_calendar_date(d) for d in dates}
    if not unique_dates:
        return 0

    if today is None:
        today = utc_today()

    last_date = max(unique_dates)
    if (today - last_date).days > 1:
        return 0

    ordered = sorted(unique_dates, reverse=True)
    streak = 1
    for current, previous in zip(ordered, ordered[1:]):
        if current - previous == timedelta(days=1):
            streak += 1
        else:
            break

    return streak


def get_weekly_total_minutes(session: Session, student_id: int, today: Optional[date] = None) -> int:
    """Minutes logged from Monday of the current UTC week through today."""
    if today is None:
        today = utc_today()
    week_start, _ = week_bounds(today)

    total = session.exec(
        select(func.coalesce(func.sum(PracticeLog.duration_minutes), 0)).where(
            PracticeLog.student_id == student_id,
            PracticeLog.date >= week_start,
            PracticeLog.date <= today,
        )
    ).one()
    return int(total)


def get_weekly_goal_minutes(session: Session, student_id: int) -> int:
    profile = session.exec(
        select(StudentProfile).where(StudentProfile.user_id == student_id)
    ).first()
    if profile and profile.weekly_practice_goal_minutes:
        return profile.weekly_practice_goal_minutes
    return settings.default_weekly_goal_minutes


def get_gamification_stats(
    session: Session,
    student_id: int,
    today: Optional[date] = None,
) -> Dict[str, int]:
    """
    Build the streak card and goal progress for a student.

    Returns:
        Dict with 'streak', 'weekly_total_minutes' and 'weekly_goal_minutes'
    """
    if today is None:
        today = utc_today()

    streak = compute_streak(get_practice_dates(session, student_id), today=today)
    weekly_total = get_weekly_total_minutes(session, student_id, today=today)
    goal = get_weekly_goal_minutes(session, student_id)

    logger.debug(
        "Gamification stats for student %s: streak=%s weekly_total=%s goal=%s",
        student_id, streak, weekly_total, goal
    )
    return {
        "streak": streak,
        "weekly_total_minutes": weekly_total,
        "weekly_goal_minutes": goal,
    }
