"""
Lesson scheduling service.

Lessons are half-open intervals [start_time, end_time). Two non-cancelled
lessons of the same teacher may not overlap; lessons that only touch at a
boundary instant do not overlap.

Concurrent writers: the overlap check and the write run in one transaction
after locking the teacher's user row (SELECT ... FOR UPDATE), so two
requests for the same teacher serialize on PostgreSQL. The database also
carries an exclusion constraint on (teacher_id, tstzrange(start_time,
end_time)) for non-cancelled lessons; a violation surfaces as ConflictError.
SQLite has neither row locks nor exclusion constraints, so there the check
is application-level only.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from studio.core.config import settings
from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models.enums import LessonStatus, NotificationType, UserRole
from studio.models.lesson import Lesson
from studio.models.user import User
from studio.schemas.lesson import LessonResponse
from studio.services.notification_service import NotificationDispatcher
from studio.services.user_service import display_name, get_user, is_student_of
from studio.utils.time_utils import (
    as_utc,
    local_today,
    utc_to_wall_clock,
    wall_clock_to_utc,
    week_bounds,
)

logger = logging.getLogger(__name__)

SCHEDULE_LINK = "/dashboard/schedule"


@dataclass(frozen=True)
class LessonConflict:
    """The existing lesson that blocks a proposed interval."""
    lesson_id: int
    start_time: datetime
    end_time: datetime
    counterparty_name: Optional[str] = None

    def message(self, zone_name: Optional[str] = None) -> str:
        zone_name = zone_name or settings.studio_timezone
        conflict_time = utc_to_wall_clock(self.start_time, zone_name).strftime("%H:%M")
        name = self.counterparty_name or "another student"
        return f"Time conflict: You already have a lesson with {name} at {conflict_time}"


def validate_interval(start: datetime, end: datetime) -> None:
    if end <= start:
        raise ValidationError("Lesson end time must be after its start time")


def validate_duration(duration_minutes: int) -> None:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise ValidationError("Duration must be a positive number of minutes")


def find_conflict(
    session: Session,
    teacher_id: int,
    proposed_start: datetime,
    proposed_end: datetime,
    exclude_lesson_id: Optional[int] = None,
) -> Optional[LessonConflict]:
    """
    Find a non-cancelled lesson of the teacher overlapping [proposed_start, proposed_end).

    Overlap test: existing.start < proposed_end AND existing.end > proposed_start.

    Args:
        session: Database session
        teacher_id: Teacher whose calendar is checked
        proposed_start: Start of the proposed interval (aware, or naive taken as UTC)
        proposed_end: Exclusive end of the proposed interval
        exclude_lesson_id: Lesson being edited, ignored so it can be moved

    Returns:
        The earliest overlapping lesson, or None

    Raises:
        ValidationError: If proposed_end <= proposed_start
    """
    proposed_start = as_utc(proposed_start)
    proposed_end = as_utc(proposed_end)
    validate_interval(proposed_start, proposed_end)

    statement = (
        select(Lesson.id, Lesson.start_time, Lesson.end_time, User.full_name)
        .outerjoin(User, User.id == Lesson.student_id)
        .where(
            Lesson.teacher_id == teacher_id,
            Lesson.status != LessonStatus.CANCELLED.value,
            Lesson.start_time < proposed_end,
            Lesson.end_time > proposed_start,
        )
    )
    if exclude_lesson_id is not None:
        statement = statement.where(Lesson.id != exclude_lesson_id)
    statement = statement.order_by(Lesson.start_time, Lesson.id)

    row = session.exec(statement).first()
    if row is None:
        return None

    lesson_id, start_time, end_time, full_name = row
    return LessonConflict(
        lesson_id=lesson_id,
        start_time=start_time,
        end_time=end_time,
        counterparty_name=full_name,
    )


def _lock_teacher(session: Session, teacher_id: int) -> User:
    """Lock the teacher row for the rest of the transaction."""
    teacher = session.exec(
        select(User).where(User.id == teacher_id).with_for_update()
    ).first()
    if teacher is None:
        raise NotFoundError(f"User with id {teacher_id} not found")
    if not teacher.is_teacher:
        raise AuthorizationError("Only teachers can schedule lessons")
    return teacher


def _check_student(session: Session, teacher_id: int, student_id: int) -> User:
    student = get_user(session, student_id)
    if not student.is_student:
        raise ValidationError(f"User {student_id} is not a student")
    if not is_student_of(session, student_id, teacher_id):
        raise AuthorizationError("Student is not on your roster")
    return student


def _commit_lesson(session: Session, lesson: Lesson) -> None:
    session.add(lesson)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Lesson write for teacher {lesson.teacher_id} rejected by the database: {e}")
        raise ConflictError("Time conflict: this lesson overlaps another lesson") from e
    session.refresh(lesson)


def schedule_lesson(
    session: Session,
    dispatcher: NotificationDispatcher,
    teacher_id: int,
    student_id: int,
    start_time: datetime,
    end_time: datetime,
    notes: Optional[str] = None,
) -> Lesson:
    """
    Create a lesson for an explicit interval and notify the student.

    Raises:
        ValidationError: Bad interval or the other user is not a student
        AuthorizationError: Acting user is not a teacher or the student is not theirs
        ConflictError: The interval overlaps another lesson of the teacher
    """
    start_time = as_utc(start_time)
    end_time = as_utc(end_time)
    validate_interval(start_time, end_time)

    teacher = _lock_teacher(session, teacher_id)
    _check_student(session, teacher_id, student_id)

    conflict = find_conflict(session, teacher_id, start_time, end_time)
    if conflict:
        session.rollback()
        raise ConflictError(conflict.message())

    lesson = Lesson(
        teacher_id=teacher_id,
        student_id=student_id,
        start_time=start_time,
        end_time=end_time,
        status=LessonStatus.SCHEDULED.value,
        notes=notes or None,
    )
    _commit_lesson(session, lesson)
    logger.info(f"Scheduled lesson {lesson.id} for teacher {teacher_id} and student {student_id}")

    local_start = utc_to_wall_clock(start_time, settings.studio_timezone)
    lesson_date = local_start.strftime("%A, %B ") + str(local_start.day)
    lesson_time = local_start.strftime("%H:%M")
    dispatcher.notify(
        student_id,
        type=NotificationType.LESSON.value,
        title="New Lesson Scheduled",
        content=f"{display_name(teacher, 'Your teacher')} scheduled a lesson for {lesson_date} at {lesson_time}.",
        link=SCHEDULE_LINK,
    )
    return lesson


def create_lesson(
    session: Session,
    dispatcher: NotificationDispatcher,
    teacher_id: int,
    student_id: int,
    lesson_date: date,
    start_time: time,
    duration_minutes: int,
    notes: Optional[str] = None,
) -> Lesson:
    """Create a lesson from wall-clock input in the studio timezone."""
    validate_duration(duration_minutes)
    start = wall_clock_to_utc(lesson_date, start_time, settings.studio_timezone)
    end = start + timedelta(minutes=duration_minutes)
    return schedule_lesson(session, dispatcher, teacher_id, student_id, start, end, notes=notes)


def _get_owned_lesson(session: Session, teacher_id: int, lesson_id: int, action: str) -> Lesson:
    lesson = session.get(Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError(f"Lesson with id {lesson_id} not found")
    if lesson.teacher_id != teacher_id:
        raise AuthorizationError(f"Not authorized to {action} this lesson")
    return lesson


def update_lesson(
    session: Session,
    teacher_id: int,
    lesson_id: int,
    student_id: int,
    lesson_date: date,
    start_time: time,
    duration_minutes: int,
    notes: Optional[str] = None,
    status: Optional[LessonStatus] = None,
) -> Lesson:
    """
    Move or edit a lesson.

    The overlap check ignores the lesson itself. Cancelling a lesson never
    conflicts. An omitted status resets the lesson to 'scheduled'.
    """
    validate_duration(duration_minutes)
    _lock_teacher(session, teacher_id)
    lesson = _get_owned_lesson(session, teacher_id, lesson_id, "edit")
    if student_id != lesson.student_id:
        _check_student(session, teacher_id, student_id)

    new_start = wall_clock_to_utc(lesson_date, start_time, settings.studio_timezone)
    new_end = new_start + timedelta(minutes=duration_minutes)
    new_status = (status or LessonStatus.SCHEDULED).value

    if new_status != LessonStatus.CANCELLED.value:
        conflict = find_conflict(session, teacher_id, new_start, new_end, exclude_lesson_id=lesson_id)
        if conflict:
            session.rollback()
            raise ConflictError(conflict.message())

    lesson.student_id = student_id
    lesson.start_time = new_start
    lesson.end_time = new_end
    lesson.notes = notes or None
    lesson.status = new_status
    _commit_lesson(session, lesson)

    logger.info(f"Updated lesson {lesson_id} for teacher {teacher_id}")
    return lesson


def delete_lesson(session: Session, teacher_id: int, lesson_id: int) -> None:
    lesson = _get_owned_lesson(session, teacher_id, lesson_id, "delete")
    session.delete(lesson)
    session.commit()
    logger.info(f"Deleted lesson {lesson_id} for teacher {teacher_id}")


def get_lessons_for_week(
    session: Session,
    user_id: int,
    week_offset: int = 0,
    today: Optional[date] = None,
) -> List[LessonResponse]:
    """
    Lessons starting in the Monday-Sunday week, in the studio timezone, that
    is week_offset weeks away from today. Teachers see the lessons they teach,
    students the lessons they attend.
    """
    user = get_user(session, user_id)
    zone_name = settings.studio_timezone
    if today is None:
        today = local_today(zone_name)
    monday, _ = week_bounds(today + timedelta(weeks=week_offset))
    week_start = wall_clock_to_utc(monday, time.min, zone_name)
    week_end = wall_clock_to_utc(monday + timedelta(days=7), time.min, zone_name)

    teacher = aliased(User)
    student = aliased(User)
    statement = (
        select(Lesson, teacher.full_name, student.full_name)
        .outerjoin(teacher, teacher.id == Lesson.teacher_id)
        .outerjoin(student, student.id == Lesson.student_id)
        .where(Lesson.start_time >= week_start, Lesson.start_time < week_end)
        .order_by(Lesson.start_time, Lesson.id)
    )
    if user.role == UserRole.TEACHER.value:
        statement = statement.where(Lesson.teacher_id == user_id)
    else:
        statement = statement.where(Lesson.student_id == user_id)

    lessons = []
    for lesson, teacher_name, student_name in session.exec(statement).all():
        lessons.append(
            LessonResponse(
                id=lesson.id,
                teacher_id=lesson.teacher_id,
                student_id=lesson.student_id,
                start_time=lesson.start_time,
                end_time=lesson.end_time,
                status=lesson.status,
                notes=lesson.notes,
                teacher_name=teacher_name,
                student_name=student_name,
            )
        )
    return lessons
