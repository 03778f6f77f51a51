"""
Roster management endpoints for teachers.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from studio.core.database import get_session
from studio.schemas.user import StudentProfileResponse, UpdateStudentNotesRequest, UserSummary
from studio.models.enums import UserRole
from studio.services.user_service import (
    get_student_profile,
    get_students_for_teacher,
    remove_student,
    require_role,
    update_student_notes,
)

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[UserSummary])
async def list_students(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Students in the acting teacher's studio."""
    require_role(session, user_id, UserRole.TEACHER)
    return get_students_for_teacher(session, user_id)


@router.get("/{student_id}", response_model=StudentProfileResponse)
async def get_student(
    student_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    return get_student_profile(session, teacher_id=user_id, student_id=student_id)


@router.put("/{student_id}/notes", response_model=StudentProfileResponse)
async def update_notes(
    student_id: int,
    user_id: int,
    request: UpdateStudentNotesRequest,
    session: Session = Depends(get_session)
):
    return update_student_notes(session, teacher_id=user_id, student_id=student_id, notes=request.notes)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_student_endpoint(
    student_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Take a student out of the studio. Their account is kept."""
    remove_student(session, teacher_id=user_id, student_id=student_id)
