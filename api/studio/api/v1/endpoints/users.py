"""
User and roster endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from studio.core.database import get_session
from studio.schemas.user import (
    CreateUserRequest,
    LinkStudentRequest,
    UpdateProfileRequest,
    UserResponse,
    UserSummary,
)
from studio.services.user_service import (
    create_user,
    get_students_for_teacher,
    get_user,
    link_student,
    update_profile,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(
    request: CreateUserRequest,
    session: Session = Depends(get_session)
):
    """Create a teacher or student."""
    return create_user(
        session,
        email=request.email,
        role=request.role,
        full_name=request.full_name,
        avatar_url=request.avatar_url,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_endpoint(
    user_id: int,
    session: Session = Depends(get_session)
):
    return get_user(session, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_profile_endpoint(
    user_id: int,
    request: UpdateProfileRequest,
    session: Session = Depends(get_session)
):
    """Update your own display name or avatar."""
    return update_profile(session, user_id, full_name=request.full_name, avatar_url=request.avatar_url)


@router.put("/{student_id}/teacher", status_code=status.HTTP_204_NO_CONTENT)
async def link_student_endpoint(
    student_id: int,
    request: LinkStudentRequest,
    session: Session = Depends(get_session)
):
    """Put a student on a teacher's roster and optionally set their weekly goal."""
    link_student(
        session,
        student_id=student_id,
        teacher_id=request.teacher_id,
        weekly_practice_goal_minutes=request.weekly_practice_goal_minutes,
    )


@router.get("/{teacher_id}/students", response_model=List[UserSummary])
async def get_students_endpoint(
    teacher_id: int,
    session: Session = Depends(get_session)
):
    """Students on a teacher's roster."""
    get_user(session, teacher_id)
    return get_students_for_teacher(session, teacher_id)
