"""
Lesson scheduling endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import logging

from studio.api.v1.endpoints.utils import get_notification_dispatcher
from studio.core.database import get_session
from studio.schemas.lesson import CreateLessonRequest, LessonResponse, UpdateLessonRequest
from studio.schemas.user import UserSummary
from studio.services.notification_service import NotificationDispatcher
from studio.services.scheduling_service import (
    create_lesson,
    delete_lesson,
    get_lessons_for_week,
    update_lesson,
)
from studio.services.user_service import get_students_for_teacher, get_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lessons", tags=["lessons"])


def _to_response(lesson) -> LessonResponse:
    return LessonResponse(
        id=lesson.id,
        teacher_id=lesson.teacher_id,
        student_id=lesson.student_id,
        start_time=lesson.start_time,
        end_time=lesson.end_time,
        status=lesson.status,
        notes=lesson.notes,
    )


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson_endpoint(
    user_id: int,
    request: CreateLessonRequest,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """
    Schedule a lesson for the acting teacher.

    Returns 409 with a message naming the overlapping lesson's time and
    student when the teacher is already booked.
    """
    lesson = create_lesson(
        session,
        dispatcher,
        teacher_id=user_id,
        student_id=request.student_id,
        lesson_date=request.date,
        start_time=request.start_time,
        duration_minutes=request.duration_minutes,
        notes=request.notes,
    )
    return _to_response(lesson)


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson_endpoint(
    lesson_id: int,
    user_id: int,
    request: UpdateLessonRequest,
    session: Session = Depends(get_session)
):
    """Move or edit a lesson; the lesson never conflicts with itself."""
    lesson = update_lesson(
        session,
        teacher_id=user_id,
        lesson_id=lesson_id,
        student_id=request.student_id,
        lesson_date=request.date,
        start_time=request.start_time,
        duration_minutes=request.duration_minutes,
        notes=request.notes,
        status=request.status,
    )
    return _to_response(lesson)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lesson_endpoint(
    lesson_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    delete_lesson(session, teacher_id=user_id, lesson_id=lesson_id)


@router.get("", response_model=List[LessonResponse])
async def list_lessons(
    user_id: int,
    week_offset: int = 0,
    session: Session = Depends(get_session)
):
    """Lessons in the Monday-Sunday week week_offset weeks from now."""
    return get_lessons_for_week(session, user_id, week_offset=week_offset)


@router.get("/students", response_model=List[UserSummary])
async def list_my_students(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Students the acting teacher can schedule lessons with."""
    get_user(session, user_id)
    return get_students_for_teacher(session, user_id)
