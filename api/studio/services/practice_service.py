"""
Practice log service.
"""
import logging
from datetime import date
from typing import List, Optional, Union
from sqlmodel import Session, select

from studio.core.exceptions import ValidationError
from studio.models.enums import UserRole
from studio.models.practice import PracticeLog
from studio.services.user_service import require_role
from studio.utils.time_utils import to_calendar_date

logger = logging.getLogger(__name__)


def log_practice_session(
    session: Session,
    student_id: int,
    practice_date: Union[date, str],
    duration_minutes: int,
    notes: Optional[str] = None,
) -> PracticeLog:
    """
    Record a practice session for a student.

    Args:
        session: Database session
        student_id: The acting student
        practice_date: Calendar date (date or ISO string; a time part is dropped)
        duration_minutes: Minutes practiced, must be a positive integer
        notes: Optional notes (blank notes are stored as NULL)

    Raises:
        ValidationError: If the date or duration is invalid
        AuthorizationError: If the user is not a student
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise ValidationError("Duration must be a positive number of minutes")
    calendar_date = to_calendar_date(practice_date)

    require_role(session, student_id, UserRole.STUDENT)

    entry = PracticeLog(
        student_id=student_id,
        date=calendar_date,
        duration_minutes=duration_minutes,
        notes=notes.strip() if notes and notes.strip() else None,
    )
    session.add(entry)
    session.commit()
    session.refresh(entry)

    logger.info(f"Logged {duration_minutes} practice minutes for student {student_id} on {calendar_date}")
    return entry


def get_practice_logs(session: Session, student_id: int) -> List[PracticeLog]:
    """All practice logs for a student, newest date first."""
    statement = (
        select(PracticeLog)
        .where(PracticeLog.student_id == student_id)
        .order_by(PracticeLog.date.desc(), PracticeLog.id.desc())
    )
    return list(session.exec(statement).all())


def get_practice_dates(session: Session, student_id: int) -> List[date]:
    """Distinct practice dates for a student, newest first."""
    statement = (
        select(PracticeLog.date)
        .where(PracticeLog.student_id == student_id)
        .distinct()
        .order_by(PracticeLog.date.desc())
    )
    return list(session.exec(statement).all())
